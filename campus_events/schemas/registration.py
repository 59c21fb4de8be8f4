"""
Registration-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import model_validator

from campus_events.models.registration import RegistrationStatus
from campus_events.utils.clock import to_naive_utc
from .common import PaginationParams, RequestSchema, UpdateSchema, UUIDStr

class RegistrationCreate(RequestSchema):
    """Schema for registering a student for an event"""
    student_id: UUIDStr
    event_id: UUIDStr
    status: RegistrationStatus = RegistrationStatus.CONFIRMED

class RegistrationUpdate(UpdateSchema):
    not_null = ("status",)

    status: Optional[RegistrationStatus] = None

class RegistrationFilters(PaginationParams):
    student_id: Optional[UUIDStr] = None
    event_id: Optional[UUIDStr] = None
    status: Optional[RegistrationStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and to_naive_utc(self.end_date) < to_naive_utc(self.start_date):
            raise ValueError("end_date must not be before start_date")
        return self
