"""
Reporting and aggregation service.

Read-only: every method composes repository queries into summary figures and
never writes. Percentages and averages are rounded to two decimals and are 0
when there is nothing to divide by.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy import and_, distinct, func
from sqlalchemy.orm import Session

from campus_events.core.config import settings
from campus_events.models import (
    Attendance,
    AttendanceStatus,
    College,
    Event,
    Feedback,
    Registration,
    RegistrationStatus,
    Student,
)
from campus_events.repositories import (
    AttendanceRepo,
    EventRepo,
    FeedbackRepo,
    RegistrationRepo,
    StudentRepo,
)
from campus_events.utils.clock import isoformat, utcnow
from campus_events.utils.stats import safe_average, safe_percentage

logger = logging.getLogger(__name__)

RATING_BUCKETS = (1, 2, 3, 4, 5)
ATTENDED_STATUSES = (AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value)


def feedback_stats(ratings: List[int], comments: Optional[List[Optional[str]]] = None) -> Dict:
    """Average, histogram and satisfaction rate over a list of ratings"""
    distribution = {bucket: 0 for bucket in RATING_BUCKETS}
    for rating in ratings:
        if rating in distribution:
            distribution[rating] += 1

    satisfied = sum(1 for rating in ratings if rating >= 4)
    stats = {
        "total_feedback": len(ratings),
        "average_rating": safe_average(ratings),
        "rating_distribution": distribution,
        "satisfaction_rate": safe_percentage(satisfied, len(ratings)),
    }
    if comments is not None:
        stats["total_comments"] = sum(1 for c in comments if c and c.strip())
    return stats


def status_breakdown(statuses: List[str], keys) -> Dict[str, int]:
    breakdown = {key: 0 for key in keys}
    for status in statuses:
        if status in breakdown:
            breakdown[status] += 1
    return breakdown


class ReportService:
    """Service for report generation"""

    # -------- per-event figures --------

    @staticmethod
    def event_attendance_rate(db: Session, event_id: str) -> Dict:
        """Registered students marked present as a share of all registrations for one event"""
        EventRepo.get_by_id(db, event_id)

        total = RegistrationRepo.count(db, {"event_id": event_id})
        present = (
            db.query(func.count(distinct(Attendance.student_id)))
            .join(Registration, and_(
                Registration.student_id == Attendance.student_id,
                Registration.event_id == Attendance.event_id,
            ))
            .filter(Attendance.event_id == event_id, Attendance.status == AttendanceStatus.PRESENT.value)
            .scalar()
        ) or 0

        return {
            "event_id": event_id,
            "total_registrations": total,
            "present": present,
            "attendance_percentage": safe_percentage(present, total),
        }

    @staticmethod
    def event_feedback_stats(db: Session, event_id: str) -> Dict:
        EventRepo.get_by_id(db, event_id)
        rows = db.query(Feedback.rating, Feedback.comments).filter(Feedback.event_id == event_id).all()

        stats = feedback_stats([r.rating for r in rows], [r.comments for r in rows])
        stats["event_id"] = event_id
        stats["count"] = stats["total_feedback"]
        return stats

    @staticmethod
    def event_attendance_summary(db: Session, event_id: str) -> Dict:
        statuses = [row.status for row in db.query(Attendance.status).filter(Attendance.event_id == event_id)]
        summary = status_breakdown(statuses, [s.value for s in AttendanceStatus])
        summary["total"] = len(statuses)
        summary["attendance_rate"] = safe_percentage(summary["present"] + summary["late"], len(statuses))
        return summary

    @staticmethod
    def event_summary(db: Session, event_id: str) -> Dict:
        """Registration, attendance and feedback figures for one event"""
        event = EventRepo.get_by_id(db, event_id)
        registrations = RegistrationRepo.list(db, {"event_id": event_id})

        registration_summary = status_breakdown(
            [r.status for r in registrations],
            [s.value for s in RegistrationStatus],
        )
        registration_summary["total_registrations"] = len(registrations)
        registration_summary["registration_rate"] = safe_percentage(len(registrations), event.max_attendees)

        feedback = ReportService.event_feedback_stats(db, event_id)
        feedback.pop("event_id")

        return {
            "event": event.to_dict(),
            "registration_summary": registration_summary,
            "attendance_summary": ReportService.event_attendance_summary(db, event_id),
            "feedback_summary": feedback,
            "generated_at": isoformat(utcnow()),
        }

    # -------- rankings --------

    @staticmethod
    def event_popularity(db: Session) -> List[Dict]:
        """Events by registration count, highest first; ties keep id order"""
        registration_count = func.count(Registration.id).label("registration_count")
        rows = (
            db.query(Event, registration_count)
            .outerjoin(Registration, Registration.event_id == Event.id)
            .group_by(Event.id)
            .order_by(registration_count.desc(), Event.id)
            .all()
        )
        return [
            {
                "event_id": event.id,
                "title": event.title,
                "date": isoformat(event.date),
                "event_type": event.event_type,
                "college_id": event.college_id,
                "max_attendees": event.max_attendees,
                "registration_count": count,
            }
            for event, count in rows
        ]

    @staticmethod
    def _participation_counts(db: Session):
        registered = dict(
            db.query(Registration.student_id, func.count(distinct(Registration.event_id)))
            .group_by(Registration.student_id)
            .all()
        )
        attended = dict(
            db.query(Attendance.student_id, func.count(distinct(Attendance.event_id)))
            .join(Registration, and_(
                Registration.student_id == Attendance.student_id,
                Registration.event_id == Attendance.event_id,
            ))
            .filter(Attendance.status.in_(ATTENDED_STATUSES))
            .group_by(Attendance.student_id)
            .all()
        )
        return registered, attended

    @staticmethod
    def student_participation(db: Session) -> List[Dict]:
        """Registered and attended event counts for every student"""
        registered, attended = ReportService._participation_counts(db)
        result = []
        for student in StudentRepo.list(db):
            registered_count = registered.get(student.id, 0)
            attended_count = attended.get(student.id, 0)
            result.append({
                "student_id": student.id,
                "name": student.name,
                "email": student.email,
                "college_id": student.college_id,
                "registered_events": registered_count,
                "attended_events": attended_count,
                "participation_rate": safe_percentage(attended_count, registered_count),
            })
        return result

    @staticmethod
    def top_students(db: Session, limit: int) -> List[Dict]:
        """Top ``limit`` students by attended events"""
        participation = ReportService.student_participation(db)
        ranked = sorted(
            participation,
            key=lambda row: (-row["attended_events"], -row["registered_events"], row["name"], row["student_id"]),
        )
        return ranked[:limit]

    @staticmethod
    def filter_events(db: Session, event_type: Optional[str] = None) -> List[Dict]:
        events = EventRepo.list(db, {"event_type": event_type})
        return [event.to_dict() for event in events]

    # -------- rollups --------

    @staticmethod
    def college_stats(db: Session, college_id: Optional[str] = None) -> Dict:
        """Per-college student, registration, attendance and feedback totals"""
        students = StudentRepo.list(db, {"college_id": college_id})

        by_college: Dict[str, List[str]] = {}
        for student in students:
            by_college.setdefault(student.college_id, []).append(student.id)

        def counts_by_college(model) -> Dict[str, int]:
            rows = (
                db.query(Student.college_id, func.count(model.id))
                .join(model, model.student_id == Student.id)
                .group_by(Student.college_id)
                .all()
            )
            return dict(rows)

        registrations = counts_by_college(Registration)
        attendance = counts_by_college(Attendance)
        feedback = counts_by_college(Feedback)
        names = dict(db.query(College.id, College.name).all())

        stats = {}
        for cid, student_ids in by_college.items():
            stats[cid] = {
                "college_name": names.get(cid),
                "total_students": len(student_ids),
                "active_registrations": registrations.get(cid, 0),
                "total_attendance": attendance.get(cid, 0),
                "total_feedback": feedback.get(cid, 0),
            }

        most_active = None
        if stats:
            most_active = sorted(stats.items(), key=lambda item: (-item[1]["active_registrations"], item[0]))[0][0]

        return {
            "college_statistics": stats,
            "summary": {
                "total_colleges": len(stats),
                "total_students": len(students),
                "most_active_college": most_active,
            },
            "generated_at": isoformat(utcnow()),
        }

    @staticmethod
    def dashboard(db: Session, days: Optional[int] = None) -> Dict:
        """Headline counts, recent activity and upcoming events"""
        days = days or settings.DASHBOARD_DAYS
        end = utcnow()
        start = end - timedelta(days=days)

        recent_registrations = RegistrationRepo.list(db, {"start_date": start, "end_date": end})
        recent_attendance = AttendanceRepo.list(db, {"start_date": start, "end_date": end})
        upcoming = EventRepo.upcoming(db, settings.UPCOMING_EVENTS_LIMIT)
        ratings = [
            row.rating for row in
            db.query(Feedback.rating).filter(Feedback.created_at >= start, Feedback.created_at <= end)
        ]

        return {
            "summary": {
                "total_events": db.query(func.count(Event.id)).scalar() or 0,
                "total_students": db.query(func.count(Student.id)).scalar() or 0,
                "total_colleges": db.query(func.count(College.id)).scalar() or 0,
                "recent_registrations": len(recent_registrations),
                "recent_attendance": len(recent_attendance),
            },
            "upcoming_events": [event.to_dict() for event in upcoming],
            "recent_activity": {
                "registrations": [r.to_dict() for r in recent_registrations[:10]],
                "attendance": [a.to_dict() for a in recent_attendance[:10]],
            },
            "feedback_overview": feedback_stats(ratings),
            "date_range": {
                "start_date": isoformat(start),
                "end_date": isoformat(end),
                "days": days,
            },
            "generated_at": isoformat(end),
        }

    # -------- filtered reports --------

    @staticmethod
    def attendance_report(db: Session, filters: Dict) -> Dict:
        records = AttendanceRepo.list(db, filters)
        statuses = [r.status for r in records]
        stats = status_breakdown(statuses, [s.value for s in AttendanceStatus])
        stats.update({
            "total_records": len(records),
            "unique_students": len({r.student_id for r in records}),
            "unique_events": len({r.event_id for r in records}),
            "attendance_rate": safe_percentage(stats["present"] + stats["late"], len(records)),
        })
        return {
            "filters": {k: (isoformat(v) if hasattr(v, "isoformat") else v) for k, v in filters.items() if v is not None},
            "statistics": stats,
            "records": [r.to_dict() for r in records],
            "generated_at": isoformat(utcnow()),
        }

    @staticmethod
    def student_performance(db: Session, student_id: str) -> Dict:
        student = StudentRepo.get_by_id(db, student_id)
        registrations = RegistrationRepo.list(db, {"student_id": student_id})
        attendance = AttendanceRepo.list(db, {"student_id": student_id})
        feedback = FeedbackRepo.list(db, {"student_id": student_id})

        registration_summary = status_breakdown(
            [r.status for r in registrations],
            [s.value for s in RegistrationStatus],
        )
        registration_summary["total_registrations"] = len(registrations)

        attendance_summary = status_breakdown([a.status for a in attendance], [s.value for s in AttendanceStatus])
        attendance_summary["total"] = len(attendance)
        attendance_summary["attendance_rate"] = safe_percentage(
            attendance_summary["present"] + attendance_summary["late"], len(attendance)
        )

        return {
            "student": student.to_dict(),
            "registration_summary": registration_summary,
            "attendance_summary": attendance_summary,
            "feedback_summary": {
                "total_feedback": len(feedback),
                "average_rating": safe_average(f.rating for f in feedback),
                "latest_feedback": [f.to_dict() for f in feedback[:5]],
            },
            "generated_at": isoformat(utcnow()),
        }
