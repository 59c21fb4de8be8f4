"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator, model_validator

from campus_events.models.event import EventStatus, EventType, MAX_ATTENDEES_LIMIT
from campus_events.utils.clock import to_naive_utc, utcnow
from .common import PaginationParams, RequestSchema, UpdateSchema, UUIDStr


def _future(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and to_naive_utc(value) <= utcnow():
        raise ValueError("Event date must be in the future")
    return value


class EventCreate(RequestSchema):
    """Schema for creating an event"""
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    date: datetime
    location: str = Field(..., min_length=3, max_length=200)
    max_attendees: int = Field(..., gt=0, le=MAX_ATTENDEES_LIMIT)
    college_id: UUIDStr
    status: EventStatus = EventStatus.SCHEDULED
    event_type: Optional[EventType] = None
    organizer: Optional[str] = Field(None, max_length=100)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return _future(value)

class EventUpdate(UpdateSchema):
    """Schema for updating an event"""
    not_null = ("title", "description", "date", "location", "max_attendees", "college_id", "status")

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=3, max_length=200)
    max_attendees: Optional[int] = Field(None, gt=0, le=MAX_ATTENDEES_LIMIT)
    college_id: Optional[UUIDStr] = None
    status: Optional[EventStatus] = None
    event_type: Optional[EventType] = None
    organizer: Optional[str] = Field(None, max_length=100)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return _future(value)

class EventFilters(PaginationParams):
    college_id: Optional[UUIDStr] = None
    status: Optional[EventStatus] = None
    event_type: Optional[EventType] = None
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    search: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def check_range(self):
        if self.from_date and self.to_date and to_naive_utc(self.to_date) < to_naive_utc(self.from_date):
            raise ValueError("to_date must not be before from_date")
        return self
