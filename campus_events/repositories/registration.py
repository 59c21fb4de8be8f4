"""
Registration repository
"""

from typing import Optional

from sqlalchemy.orm import Session

from campus_events.core.exceptions import ConflictError
from campus_events.models import Registration
from campus_events.models.registration import ACTIVE_STATUSES
from .base import BaseRepo, date_range
from .event import EventRepo
from .student import StudentRepo


class RegistrationRepo(BaseRepo):
    model = Registration
    entity_name = "registration"
    conflict_message = "Student is already registered for this event"

    @classmethod
    def order_by(cls):
        return [Registration.registration_date.desc(), Registration.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("student_id"):
            query = query.filter(Registration.student_id == filters["student_id"])
        if filters.get("event_id"):
            query = query.filter(Registration.event_id == filters["event_id"])
        if filters.get("status"):
            query = query.filter(Registration.status == filters["status"])
        return date_range(query, Registration.registration_date, filters.get("start_date"), filters.get("end_date"))

    @classmethod
    def find_active(cls, db: Session, student_id: str, event_id: str) -> Optional[Registration]:
        with cls._operation(db, "fetch"):
            return db.query(Registration).filter(
                Registration.student_id == student_id,
                Registration.event_id == event_id,
                Registration.status.in_(ACTIVE_STATUSES),
            ).first()

    @classmethod
    def create(cls, db: Session, record: Registration) -> Registration:
        StudentRepo.get_by_id(db, record.student_id)
        EventRepo.get_by_id(db, record.event_id)
        if record.is_active() and cls.find_active(db, record.student_id, record.event_id):
            raise ConflictError(cls.conflict_message)
        return super().create(db, record)

    @classmethod
    def update(cls, db: Session, record_id: str, changes: dict) -> Registration:
        current = cls.get_by_id(db, record_id)
        if changes.get("status") in ACTIVE_STATUSES and not current.is_active():
            existing = cls.find_active(db, current.student_id, current.event_id)
            if existing and existing.id != record_id:
                raise ConflictError(cls.conflict_message)
        return super().update(db, record_id, changes)
