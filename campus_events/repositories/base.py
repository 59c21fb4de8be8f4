"""
Repository base: shared CRUD over one SQLAlchemy model.

Store failures are rolled back, logged and re-raised with the operation
that failed ("Failed to create event: ..."). Unique constraint violations
surface as ConflictError; other integrity failures (NOT NULL, foreign keys)
are client errors. Lookups that are existence checks return None
instead of raising.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from campus_events.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    PersistenceError,
)
from campus_events.utils.clock import to_naive_utc

logger = logging.getLogger(__name__)


class BaseRepo:
    model: Any = None
    entity_name: str = "record"
    conflict_message: str = "Record already exists"

    # -------- hooks --------

    @classmethod
    def order_by(cls) -> list:
        return [cls.model.id]

    @classmethod
    def apply_filters(cls, query: Query, filters: Dict[str, Any]) -> Query:
        return query

    # -------- error wrapping --------

    @classmethod
    @contextmanager
    def _operation(cls, db: Session, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            db.rollback()
            logger.warning("Integrity error during %s %s: %s", action, cls.entity_name, exc.orig)
            if is_unique_violation(exc):
                raise ConflictError(cls.conflict_message)
            raise DomainValidationError(f"Invalid {cls.entity_name} data: a required value or reference is missing")
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Failed to %s %s: %s", action, cls.entity_name, exc)
            raise PersistenceError(f"Failed to {action} {cls.entity_name}: {exc}")

    # -------- CRUD --------

    @classmethod
    def create(cls, db: Session, record):
        with cls._operation(db, "create"):
            db.add(record)
            db.commit()
            db.refresh(record)
        return record

    @classmethod
    def create_many(cls, db: Session, records: List[Any]) -> List[Any]:
        """Insert all records in one transaction, or none of them"""
        with cls._operation(db, "create"):
            db.add_all(records)
            db.commit()
            for record in records:
                db.refresh(record)
        return records

    @classmethod
    def list(cls, db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        filters = {k: v for k, v in (filters or {}).items() if v is not None}
        with cls._operation(db, "fetch"):
            query = cls.apply_filters(db.query(cls.model), filters)
            query = query.order_by(*cls.order_by())
            if filters.get("offset"):
                query = query.offset(filters["offset"])
            if filters.get("limit"):
                query = query.limit(filters["limit"])
            return query.all()

    @classmethod
    def count(cls, db: Session, filters: Optional[Dict[str, Any]] = None) -> int:
        filters = {k: v for k, v in (filters or {}).items() if v is not None}
        with cls._operation(db, "count"):
            return cls.apply_filters(db.query(cls.model), filters).count()

    @classmethod
    def find_by_id(cls, db: Session, record_id: str):
        with cls._operation(db, "fetch"):
            return db.get(cls.model, record_id)

    @classmethod
    def get_by_id(cls, db: Session, record_id: str):
        record = cls.find_by_id(db, record_id)
        if record is None:
            raise NotFoundError(cls.entity_name.capitalize(), record_id)
        return record

    @classmethod
    def update(cls, db: Session, record_id: str, changes: Dict[str, Any]):
        record = cls.get_by_id(db, record_id)
        with cls._operation(db, "update"):
            for key, value in changes.items():
                if isinstance(value, datetime):
                    value = to_naive_utc(value)
                setattr(record, key, value)
            db.commit()
            db.refresh(record)
        return record

    @classmethod
    def delete(cls, db: Session, record_id: str) -> bool:
        record = cls.find_by_id(db, record_id)
        if record is None:
            return False
        with cls._operation(db, "delete"):
            db.delete(record)
            db.commit()
        return True


def is_unique_violation(exc: IntegrityError) -> bool:
    # 23505 is unique_violation on PostgreSQL; SQLite only reports a message
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode:
        return pgcode == "23505"
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


def contains(column, term: str):
    """Case-insensitive substring match; % and _ in the term match literally"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def date_range(query: Query, column, start=None, end=None) -> Query:
    if start is not None:
        query = query.filter(column >= to_naive_utc(start))
    if end is not None:
        query = query.filter(column <= to_naive_utc(end))
    return query
