"""
Report routes: read-only aggregates and spreadsheet exports
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.exceptions import NotFoundError
from campus_events.core.permissions import READ
from campus_events.services.excel_service import ExcelService
from campus_events.services.report_service import ReportService
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response, xlsx_response

router = APIRouter()

can_read_reports = require_permission("reports", READ)


@router.get("/event-popularity")
async def event_popularity(db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    """Events ranked by registration count"""
    return success_response("Event popularity report generated", ReportService.event_popularity(db))


@router.get("/student-participation")
async def student_participation(db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    return success_response("Student participation report generated", ReportService.student_participation(db))


@router.get("/top-students")
async def top_students(
    limit: int = Query(3, ge=1, le=100),
    db: Session = Depends(get_db),
    user: dict = Depends(can_read_reports)
):
    """Most active students by attended events"""
    return success_response("Top students retrieved", ReportService.top_students(db, limit))


@router.get("/filter")
async def filter_events(
    event_type: Optional[str] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    user: dict = Depends(can_read_reports)
):
    """Events of one type, ordered by date"""
    filters = require_valid("event.filters", {"event_type": event_type})
    return success_response("Filtered events retrieved", ReportService.filter_events(db, filters.get("event_type")))


@router.get("/attendance/{event_id}")
async def event_attendance(event_id: str, db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    return success_response("Attendance percentage calculated", ReportService.event_attendance_rate(db, event_id))


@router.get("/feedback/{event_id}")
async def event_feedback(event_id: str, db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    return success_response("Feedback statistics calculated", ReportService.event_feedback_stats(db, event_id))


@router.get("/dashboard")
async def dashboard(
    days: Optional[int] = Query(None, ge=1, le=365),
    db: Session = Depends(get_db),
    user: dict = Depends(can_read_reports)
):
    return success_response("Dashboard summary generated", ReportService.dashboard(db, days))


@router.get("/colleges")
async def college_stats(
    college_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(can_read_reports)
):
    """Per-college rollups"""
    return success_response("College statistics generated", ReportService.college_stats(db, college_id))


@router.get("/events/{event_id}/summary")
async def event_summary(event_id: str, db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    return success_response("Event summary report generated", ReportService.event_summary(db, event_id))


@router.get("/students/{student_id}/performance")
async def student_performance(student_id: str, db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    return success_response("Student performance report generated", ReportService.student_performance(db, student_id))


@router.get("/attendance-records")
async def attendance_records(request: Request, db: Session = Depends(get_db), user: dict = Depends(can_read_reports)):
    """Attendance over event, student and date filters"""
    filters = require_valid("attendance.filters", dict(request.query_params))
    return success_response("Attendance report generated", ReportService.attendance_report(db, filters))


def _college_rows(db: Session):
    stats = ReportService.college_stats(db)["college_statistics"]
    return [{"college_id": college_id, **row} for college_id, row in stats.items()]


EXPORTS = {
    "event-popularity": lambda db, limit: ReportService.event_popularity(db),
    "student-participation": lambda db, limit: ReportService.student_participation(db),
    "top-students": lambda db, limit: ReportService.top_students(db, limit),
    "colleges": lambda db, limit: _college_rows(db),
    "attendance-records": lambda db, limit: ReportService.attendance_report(db, {})["records"],
}


@router.get("/export/{report}.xlsx")
async def export_report(
    report: str,
    limit: int = Query(3, ge=1, le=100),
    db: Session = Depends(get_db),
    user: dict = Depends(can_read_reports)
):
    """Download a report table as an Excel workbook"""
    if report not in EXPORTS:
        raise NotFoundError("Report", report)

    rows = EXPORTS[report](db, limit)
    return xlsx_response(ExcelService.export_rows(rows, report), f"{report}.xlsx")
