"""
Attendance repository
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_events.core.exceptions import ConflictError
from campus_events.models import Attendance
from .base import BaseRepo, date_range
from .event import EventRepo
from .student import StudentRepo


class AttendanceRepo(BaseRepo):
    model = Attendance
    entity_name = "attendance"
    conflict_message = "Student already checked in for this event"

    @classmethod
    def order_by(cls):
        return [Attendance.created_at.desc(), Attendance.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("student_id"):
            query = query.filter(Attendance.student_id == filters["student_id"])
        if filters.get("event_id"):
            query = query.filter(Attendance.event_id == filters["event_id"])
        if filters.get("status"):
            query = query.filter(Attendance.status == filters["status"])
        # records without a check-in time are dated by when they were marked
        marked_at = func.coalesce(Attendance.check_in_time, Attendance.created_at)
        return date_range(query, marked_at, filters.get("start_date"), filters.get("end_date"))

    @classmethod
    def find_for(cls, db: Session, student_id: str, event_id: str) -> Optional[Attendance]:
        with cls._operation(db, "fetch"):
            return db.query(Attendance).filter(
                Attendance.student_id == student_id,
                Attendance.event_id == event_id,
            ).first()

    @classmethod
    def create(cls, db: Session, record: Attendance) -> Attendance:
        StudentRepo.get_by_id(db, record.student_id)
        EventRepo.get_by_id(db, record.event_id)
        if cls.find_for(db, record.student_id, record.event_id):
            raise ConflictError(cls.conflict_message)
        return super().create(db, record)
