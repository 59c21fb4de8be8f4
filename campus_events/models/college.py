"""
College model
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, EMAIL_RE, PHONE_RE, require, text_length
from campus_events.utils.clock import isoformat

class College(RecordMixin, Base):
    __tablename__ = "colleges"

    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=True)
    contact_email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)

    # Relationships
    students = relationship("Student", back_populates="college")
    events = relationship("Event", back_populates="college")

    @classmethod
    def create(cls, data: dict) -> "College":
        require(text_length(data.get("name")) >= 3, "College name must be at least 3 characters long")
        if data.get("address") is not None:
            require(text_length(data["address"]) >= 10, "College address must be at least 10 characters long")
        if data.get("contact_email") is not None:
            require(bool(EMAIL_RE.match(data["contact_email"])), "Valid contact email is required")
        if data.get("phone"):
            require(bool(PHONE_RE.match(data["phone"])), "Invalid phone number format")

        return cls(
            name=data["name"].strip(),
            address=data.get("address"),
            contact_email=data.get("contact_email"),
            phone=data.get("phone"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "contact_email": self.contact_email,
            "phone": self.phone,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
