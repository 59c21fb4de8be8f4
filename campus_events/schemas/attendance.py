"""
Attendance-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from campus_events.models.attendance import AttendanceStatus
from campus_events.utils.clock import to_naive_utc
from .common import PaginationParams, RequestSchema, UpdateSchema, UUIDStr


def _check_times(check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_in and check_out and to_naive_utc(check_out) < to_naive_utc(check_in):
        raise ValueError("Check-out time must be after check-in time")


class AttendanceCreate(RequestSchema):
    """Schema for marking attendance"""
    student_id: UUIDStr
    event_id: UUIDStr
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_times(self):
        _check_times(self.check_in_time, self.check_out_time)
        return self

class AttendanceUpdate(UpdateSchema):
    not_null = ("status",)

    status: Optional[AttendanceStatus] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_times(self):
        _check_times(self.check_in_time, self.check_out_time)
        return self

class AttendanceFilters(PaginationParams):
    student_id: Optional[UUIDStr] = None
    event_id: Optional[UUIDStr] = None
    status: Optional[AttendanceStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
