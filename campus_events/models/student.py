"""
Student model
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, EMAIL_RE, PHONE_RE, require, text_length
from campus_events.utils.clock import isoformat

class Student(RecordMixin, Base):
    __tablename__ = "students"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    roll_number = Column(String(50), nullable=True)
    department = Column(String(100), nullable=True)
    college_id = Column(String(36), ForeignKey("colleges.id"), nullable=False, index=True)

    # Relationships
    college = relationship("College", back_populates="students")
    registrations = relationship("Registration", back_populates="student", cascade="all, delete-orphan")
    attendance = relationship("Attendance", back_populates="student", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="student", cascade="all, delete-orphan")

    @classmethod
    def create(cls, data: dict) -> "Student":
        require(text_length(data.get("name")) >= 2, "Student name must be at least 2 characters long")
        require(bool(data.get("email")) and bool(EMAIL_RE.match(data["email"])), "Valid email is required")
        if data.get("phone"):
            require(bool(PHONE_RE.match(data["phone"])), "Invalid phone number format")
        require(bool(data.get("college_id")), "College ID is required")

        return cls(
            email=data["email"].strip(),
            name=data["name"].strip(),
            phone=data.get("phone"),
            roll_number=data.get("roll_number"),
            department=data.get("department"),
            college_id=data["college_id"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "roll_number": self.roll_number,
            "department": self.department,
            "college_id": self.college_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
