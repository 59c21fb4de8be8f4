"""
Admin model
"""

import enum
import re

from sqlalchemy import Column, String, Boolean, DateTime

from campus_events.core.db import Base
from campus_events.models.mixins import RecordMixin, EMAIL_RE, require
from campus_events.utils.clock import isoformat, utcnow

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,20}$")

class Role(str, enum.Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

class Admin(RecordMixin, Base):
    __tablename__ = "admins"

    username = Column(String(20), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.ADMIN.value)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)

    @classmethod
    def create(cls, data: dict) -> "Admin":
        require(
            bool(data.get("username")) and bool(USERNAME_RE.match(data["username"])),
            "Username must be 3-20 characters long and contain only letters, numbers, and underscores"
        )
        require(bool(data.get("email")) and bool(EMAIL_RE.match(data["email"])), "Valid email is required")
        require(bool(data.get("password_hash")), "Password hash is required")
        role = data.get("role") or Role.ADMIN.value
        require(role in {r.value for r in Role}, f"Role must be one of: {', '.join(r.value for r in Role)}")

        return cls(
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=role,
            is_active=data.get("is_active", True),
        )

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    def is_super_admin(self) -> bool:
        return self.role_enum is Role.SUPER_ADMIN

    def mark_logged_in(self) -> None:
        self.last_login = utcnow()

    def to_dict(self, include_sensitive: bool = False) -> dict:
        result = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
            "last_login": isoformat(self.last_login),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_sensitive:
            result["password_hash"] = self.password_hash
        return result
