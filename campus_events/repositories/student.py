"""
Student repository
"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from campus_events.core.exceptions import ConflictError
from campus_events.models import Student
from .base import BaseRepo, contains
from .college import CollegeRepo


class StudentRepo(BaseRepo):
    model = Student
    entity_name = "student"
    conflict_message = "Student with this email already exists"

    @classmethod
    def order_by(cls):
        return [Student.name, Student.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("college_id"):
            query = query.filter(Student.college_id == filters["college_id"])
        if filters.get("department"):
            query = query.filter(Student.department == filters["department"])
        if filters.get("search"):
            term = filters['search']
            query = query.filter(or_(contains(Student.name, term), contains(Student.email, term)))
        return query

    @classmethod
    def find_by_email(cls, db: Session, email: str) -> Optional[Student]:
        with cls._operation(db, "fetch"):
            return db.query(Student).filter(Student.email == email).first()

    @classmethod
    def email_exists(cls, db: Session, email: str, exclude_id: Optional[str] = None) -> bool:
        existing = cls.find_by_email(db, email)
        return existing is not None and existing.id != exclude_id

    @classmethod
    def create(cls, db: Session, record: Student) -> Student:
        CollegeRepo.get_by_id(db, record.college_id)
        if cls.email_exists(db, record.email):
            raise ConflictError(cls.conflict_message)
        return super().create(db, record)

    @classmethod
    def update(cls, db: Session, record_id: str, changes: dict) -> Student:
        if changes.get("college_id"):
            CollegeRepo.get_by_id(db, changes["college_id"])
        if changes.get("email") and cls.email_exists(db, changes["email"], exclude_id=record_id):
            raise ConflictError(cls.conflict_message)
        return super().update(db, record_id, changes)
