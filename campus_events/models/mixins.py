"""
Shared columns and validation helpers for models
"""

import re
import uuid

from sqlalchemy import Column, DateTime, String

from campus_events.core.exceptions import DomainValidationError
from campus_events.utils.clock import utcnow

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-\(\)]{10,15}$")


def new_id() -> str:
    return str(uuid.uuid4())


def require(condition: bool, message: str) -> None:
    if not condition:
        raise DomainValidationError(message)


def text_length(value) -> int:
    return len(value.strip()) if isinstance(value, str) else 0


class RecordMixin:
    """UUID primary key plus creation/update timestamps"""

    id = Column(String(36), primary_key=True, default=new_id, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
