"""
Registration model
"""

import enum

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, require
from campus_events.utils.clock import isoformat, to_naive_utc, utcnow

class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    WAITLISTED = "waitlisted"

# Any status but cancelled holds the student's seat
ACTIVE_STATUSES = (
    RegistrationStatus.PENDING.value,
    RegistrationStatus.CONFIRMED.value,
    RegistrationStatus.WAITLISTED.value,
)

class Registration(RecordMixin, Base):
    __tablename__ = "registrations"

    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=RegistrationStatus.CONFIRMED.value)
    registration_date = Column(DateTime, nullable=False, default=utcnow, index=True)

    # One live registration per student and event; cancelled rows are history
    __table_args__ = (
        Index(
            "uq_active_registration",
            "student_id",
            "event_id",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    # Relationships
    student = relationship("Student", back_populates="registrations")
    event = relationship("Event", back_populates="registrations")

    @classmethod
    def create(cls, data: dict) -> "Registration":
        require(bool(data.get("student_id")), "Student ID is required")
        require(bool(data.get("event_id")), "Event ID is required")
        status = data.get("status") or RegistrationStatus.CONFIRMED.value
        require(
            status in {s.value for s in RegistrationStatus},
            f"Status must be one of: {', '.join(s.value for s in RegistrationStatus)}"
        )

        return cls(
            student_id=data["student_id"],
            event_id=data["event_id"],
            status=status,
            registration_date=to_naive_utc(data.get("registration_date")) or utcnow(),
        )

    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "event_id": self.event_id,
            "status": self.status,
            "registration_date": isoformat(self.registration_date),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
