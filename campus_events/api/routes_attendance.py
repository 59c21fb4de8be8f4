"""
Attendance routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.config import settings
from campus_events.core.db import get_db
from campus_events.core.exceptions import CampusEventsError, ValidationFailed
from campus_events.core.permissions import READ, WRITE
from campus_events.models import Attendance
from campus_events.repositories import AttendanceRepo
from campus_events.services.excel_service import ExcelService
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response, xlsx_response

router = APIRouter()


@router.get("")
async def list_attendance(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("attendance", READ))
):
    filters = require_valid("attendance.filters", dict(request.query_params))
    records = AttendanceRepo.list(db, filters)
    return success_response("Attendance records retrieved successfully", [a.to_dict() for a in records])


@router.post("", status_code=201)
async def mark_attendance(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("attendance", WRITE))
):
    """Mark attendance for one student at one event"""
    data = require_valid("attendance.create", payload)
    record = AttendanceRepo.create(db, Attendance.create(data))
    return success_response("Attendance marked successfully", record.to_dict())


@router.put("/{attendance_id}")
async def update_attendance(
    attendance_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("attendance", WRITE))
):
    """Update status, times or notes; check-out stays after check-in"""
    changes = require_valid("attendance.update", payload)
    current = AttendanceRepo.get_by_id(db, attendance_id)

    Attendance.check_times(
        changes.get("check_in_time", current.check_in_time),
        changes.get("check_out_time", current.check_out_time),
    )
    record = AttendanceRepo.update(db, attendance_id, changes)
    return success_response("Attendance updated successfully", record.to_dict())


@router.post("/bulk-upload", status_code=201)
async def bulk_upload_attendance(
    event_id: str = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("attendance", WRITE))
):
    """Upload and process an attendance spreadsheet for one event"""
    # Validate file type
    if not file.filename or not file.filename.endswith(('.xlsx', '.xls')):
        raise ValidationFailed(
            [{"field": "file", "message": "Please upload an Excel file (.xlsx or .xls)"}],
            message="Invalid file format",
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise CampusEventsError("File too large", status_code=413)

    success, errors, processed = ExcelService.process_attendance_upload(content, event_id, db)
    if not success:
        raise ValidationFailed(
            [{"field": "file", "message": error} for error in errors],
            message="Attendance upload failed",
        )

    return success_response(
        f"Imported {processed} attendance records",
        {"event_id": event_id, "processed_count": processed},
    )


@router.get("/template")
async def download_template(user: dict = Depends(require_permission("attendance", READ))):
    """Blank attendance upload template"""
    return xlsx_response(ExcelService.create_template(), "attendance_template.xlsx")
