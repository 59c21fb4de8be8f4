"""
Attendance model
"""

import enum

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, require
from campus_events.utils.clock import isoformat, to_naive_utc

class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"

class Attendance(RecordMixin, Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "event_id", name="uq_attendance_student_event"),
    )

    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    check_in_time = Column(DateTime, nullable=True, index=True)
    check_out_time = Column(DateTime, nullable=True)
    notes = Column(String(500), nullable=True)

    # Relationships
    student = relationship("Student", back_populates="attendance")
    event = relationship("Event", back_populates="attendance")

    @staticmethod
    def check_times(check_in, check_out) -> None:
        if check_out is not None:
            require(check_in is not None, "Cannot check out a student who has not checked in")
            require(to_naive_utc(check_out) >= to_naive_utc(check_in), "Check-out time must be after check-in time")

    @classmethod
    def create(cls, data: dict) -> "Attendance":
        require(bool(data.get("student_id")), "Student ID is required")
        require(bool(data.get("event_id")), "Event ID is required")
        require(
            data.get("status") in {s.value for s in AttendanceStatus},
            f"Status must be one of: {', '.join(s.value for s in AttendanceStatus)}"
        )
        cls.check_times(data.get("check_in_time"), data.get("check_out_time"))

        return cls(
            student_id=data["student_id"],
            event_id=data["event_id"],
            status=data["status"],
            check_in_time=to_naive_utc(data.get("check_in_time")),
            check_out_time=to_naive_utc(data.get("check_out_time")),
            notes=data.get("notes"),
        )

    def is_checked_in(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is None

    def duration_minutes(self):
        """Minutes between check-in and check-out, None while either is missing"""
        if not self.check_in_time or not self.check_out_time:
            return None
        return int((self.check_out_time - self.check_in_time).total_seconds() // 60)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "event_id": self.event_id,
            "status": self.status,
            "check_in_time": isoformat(self.check_in_time),
            "check_out_time": isoformat(self.check_out_time),
            "duration_minutes": self.duration_minutes(),
            "notes": self.notes,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
