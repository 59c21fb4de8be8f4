"""
Admin repository
"""

from typing import Optional

from sqlalchemy.orm import Session

from campus_events.models import Admin
from .base import BaseRepo


class AdminRepo(BaseRepo):
    model = Admin
    entity_name = "admin"
    conflict_message = "Admin with this username or email already exists"

    @classmethod
    def order_by(cls):
        return [Admin.created_at.desc(), Admin.id]

    @classmethod
    def find_by_email(cls, db: Session, email: str) -> Optional[Admin]:
        with cls._operation(db, "fetch"):
            return db.query(Admin).filter(Admin.email == email).first()

    @classmethod
    def find_by_username(cls, db: Session, username: str) -> Optional[Admin]:
        with cls._operation(db, "fetch"):
            return db.query(Admin).filter(Admin.username == username).first()

    @classmethod
    def find_by_identifier(cls, db: Session, identifier: str) -> Optional[Admin]:
        return cls.find_by_email(db, identifier) or cls.find_by_username(db, identifier)
