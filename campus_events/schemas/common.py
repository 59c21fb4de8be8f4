"""
Common Pydantic schemas and field types
"""

import re
import uuid
from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional, Tuple

from pydantic import AfterValidator, BaseModel, Field, ValidationInfo, field_validator, model_validator

from campus_events.utils.clock import utcnow

PHONE_RE = re.compile(r"^\+?[\d\s\-\(\)]{10,15}$")


def _check_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise ValueError("must be a valid UUID")


def _check_phone(value: str) -> str:
    if not PHONE_RE.match(value):
        raise ValueError("must be a valid phone number")
    return value


UUIDStr = Annotated[str, AfterValidator(_check_uuid)]
PhoneStr = Annotated[str, AfterValidator(_check_phone)]


class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool = True
    message: str
    data: Optional[Any] = None
    timestamp: datetime = Field(default_factory=utcnow)

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    errors: Optional[Any] = None
    timestamp: datetime = Field(default_factory=utcnow)

class RequestSchema(BaseModel):
    """Base for request payloads: unknown fields dropped, strings trimmed"""

    class Config:
        extra = "ignore"
        str_strip_whitespace = True
        use_enum_values = True
        validate_default = True

class UpdateSchema(RequestSchema):
    """Partial update; at least one field must be present.

    Fields listed in ``not_null`` back NOT NULL columns: they may be left out
    but not sent as null.
    """

    not_null: ClassVar[Tuple[str, ...]] = ()

    class Config:
        validate_default = False

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None and info.field_name in cls.not_null:
            raise ValueError("may not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

class PaginationParams(RequestSchema):
    """Pagination parameters"""
    limit: Optional[int] = Field(None, ge=1, le=500)
    offset: int = Field(0, ge=0)
