"""
Feedback repository
"""

from typing import Optional

from sqlalchemy.orm import Session

from campus_events.models import Feedback
from .base import BaseRepo, date_range
from .event import EventRepo
from .student import StudentRepo


class FeedbackRepo(BaseRepo):
    model = Feedback
    entity_name = "feedback"
    conflict_message = "Feedback already submitted"

    @classmethod
    def order_by(cls):
        return [Feedback.created_at.desc(), Feedback.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("student_id"):
            query = query.filter(Feedback.student_id == filters["student_id"])
        if filters.get("event_id"):
            query = query.filter(Feedback.event_id == filters["event_id"])
        if filters.get("rating"):
            query = query.filter(Feedback.rating == filters["rating"])
        if filters.get("min_rating"):
            query = query.filter(Feedback.rating >= filters["min_rating"])
        if filters.get("max_rating"):
            query = query.filter(Feedback.rating <= filters["max_rating"])
        return date_range(query, Feedback.created_at, filters.get("start_date"), filters.get("end_date"))

    @classmethod
    def find_for_student_event(cls, db: Session, student_id: str, event_id: str) -> Optional[Feedback]:
        with cls._operation(db, "fetch"):
            return db.query(Feedback).filter(
                Feedback.student_id == student_id,
                Feedback.event_id == event_id,
            ).first()

    @classmethod
    def create(cls, db: Session, record: Feedback) -> Feedback:
        StudentRepo.get_by_id(db, record.student_id)
        EventRepo.get_by_id(db, record.event_id)
        return super().create(db, record)
