"""
Feedback model
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, require
from campus_events.utils.clock import isoformat, utcnow

MIN_RATING = 1
MAX_RATING = 5

class Feedback(RecordMixin, Base):
    __tablename__ = "feedback"

    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comments = Column(Text, nullable=True)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    student = relationship("Student", back_populates="feedback")
    event = relationship("Event", back_populates="feedback")

    @staticmethod
    def is_valid_rating(rating) -> bool:
        return (
            isinstance(rating, int)
            and not isinstance(rating, bool)
            and MIN_RATING <= rating <= MAX_RATING
        )

    @classmethod
    def create(cls, data: dict) -> "Feedback":
        require(bool(data.get("student_id")), "Student ID is required")
        require(bool(data.get("event_id")), "Event ID is required")
        require(
            cls.is_valid_rating(data.get("rating")),
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )
        comments = data.get("comments")
        require(comments is None or isinstance(comments, str), "Comments must be a string")

        return cls(
            student_id=data["student_id"],
            event_id=data["event_id"],
            rating=data["rating"],
            comments=comments,
            submitted_at=utcnow(),
        )

    def is_positive(self) -> bool:
        return self.rating >= 4

    def is_negative(self) -> bool:
        return self.rating <= 2

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "event_id": self.event_id,
            "rating": self.rating,
            "comments": self.comments,
            "submitted_at": isoformat(self.submitted_at),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
