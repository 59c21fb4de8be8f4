"""
Event repository
"""

from typing import List

from sqlalchemy.orm import Session

from campus_events.models import Event, Registration
from campus_events.models.registration import ACTIVE_STATUSES
from campus_events.utils.clock import utcnow
from .base import BaseRepo, contains, date_range
from .college import CollegeRepo


class EventRepo(BaseRepo):
    model = Event
    entity_name = "event"
    conflict_message = "Event already exists"

    @classmethod
    def order_by(cls):
        return [Event.date, Event.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("college_id"):
            query = query.filter(Event.college_id == filters["college_id"])
        if filters.get("status"):
            query = query.filter(Event.status == filters["status"])
        if filters.get("event_type"):
            query = query.filter(Event.event_type == filters["event_type"])
        if filters.get("search"):
            query = query.filter(contains(Event.title, filters['search']))
        return date_range(query, Event.date, filters.get("from_date"), filters.get("to_date"))

    @classmethod
    def create(cls, db: Session, record: Event) -> Event:
        CollegeRepo.get_by_id(db, record.college_id)
        return super().create(db, record)

    @classmethod
    def update(cls, db: Session, record_id: str, changes: dict) -> Event:
        if changes.get("college_id"):
            CollegeRepo.get_by_id(db, changes["college_id"])
        return super().update(db, record_id, changes)

    @classmethod
    def upcoming(cls, db: Session, limit: int = 5) -> List[Event]:
        with cls._operation(db, "fetch"):
            return (
                db.query(Event)
                .filter(Event.date >= utcnow())
                .order_by(*cls.order_by())
                .limit(limit)
                .all()
            )

    @classmethod
    def active_registration_count(cls, db: Session, event_id: str) -> int:
        with cls._operation(db, "count"):
            return db.query(Registration).filter(
                Registration.event_id == event_id,
                Registration.status.in_(ACTIVE_STATUSES),
            ).count()
