"""
Event model
"""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, require, text_length
from campus_events.utils.clock import isoformat, to_naive_utc, utcnow

class EventStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class EventType(str, enum.Enum):
    WORKSHOP = "workshop"
    SEMINAR = "seminar"
    COMPETITION = "competition"
    CULTURAL = "cultural"
    SPORTS = "sports"
    CONFERENCE = "conference"
    WEBINAR = "webinar"
    MEETING = "meeting"
    TRAINING = "training"

MAX_ATTENDEES_LIMIT = 10000

class Event(RecordMixin, Base):
    __tablename__ = "events"

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    location = Column(String(200), nullable=False)
    max_attendees = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=EventStatus.SCHEDULED.value)
    event_type = Column(String(30), nullable=True, index=True)
    organizer = Column(String(100), nullable=True)
    college_id = Column(String(36), ForeignKey("colleges.id"), nullable=False, index=True)

    # Relationships
    college = relationship("College", back_populates="events")
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    attendance = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="event", cascade="all, delete-orphan")

    @staticmethod
    def is_future(value: datetime) -> bool:
        return to_naive_utc(value) > utcnow()

    @staticmethod
    def is_valid_capacity(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_ATTENDEES_LIMIT

    @classmethod
    def create(cls, data: dict) -> "Event":
        require(text_length(data.get("title")) >= 3, "Event title must be at least 3 characters long")
        require(text_length(data.get("description")) >= 10, "Event description must be at least 10 characters long")
        require(isinstance(data.get("date"), datetime) and cls.is_future(data["date"]), "Event date must be in the future")
        require(text_length(data.get("location")) >= 3, "Event location must be at least 3 characters long")
        require(cls.is_valid_capacity(data.get("max_attendees")), "Max attendees must be a positive integer")
        require(bool(data.get("college_id")), "College ID is required")

        status = data.get("status") or EventStatus.SCHEDULED.value
        require(status in {s.value for s in EventStatus}, f"Status must be one of: {', '.join(s.value for s in EventStatus)}")
        if data.get("event_type") is not None:
            require(
                data["event_type"] in {t.value for t in EventType},
                f"Event type must be one of: {', '.join(t.value for t in EventType)}"
            )

        return cls(
            title=data["title"].strip(),
            description=data["description"].strip(),
            date=to_naive_utc(data["date"]),
            location=data["location"].strip(),
            max_attendees=data["max_attendees"],
            status=status,
            event_type=data.get("event_type"),
            organizer=data.get("organizer"),
            college_id=data["college_id"],
        )

    def is_past(self) -> bool:
        return self.date < utcnow()

    def is_full(self, current_count: int = 0) -> bool:
        return current_count >= self.max_attendees

    def available_spots(self, current_count: int = 0) -> int:
        return max(0, self.max_attendees - current_count)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": isoformat(self.date),
            "location": self.location,
            "max_attendees": self.max_attendees,
            "status": self.status,
            "event_type": self.event_type,
            "organizer": self.organizer,
            "college_id": self.college_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
