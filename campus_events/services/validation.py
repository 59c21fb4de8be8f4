"""
Schema validation service.

Every payload that reaches a repository goes through here first. Callers name
a schema and get back either the normalized value (defaults applied, unknown
fields stripped, strings trimmed) or a list of ``{"field", "message"}``
errors. Bad business input never raises; asking for a schema that does not
exist does.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from campus_events.core.exceptions import ValidationFailed
from campus_events.schemas import (
    AttendanceCreate,
    AttendanceFilters,
    AttendanceUpdate,
    ChangePasswordRequest,
    CollegeCreate,
    CollegeFilters,
    EventCreate,
    EventFilters,
    EventUpdate,
    FeedbackCreate,
    FeedbackFilters,
    ForgotPasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RefreshRequest,
    RegisterRequest,
    RegistrationCreate,
    RegistrationFilters,
    RegistrationUpdate,
    StudentCreate,
    StudentFilters,
    StudentUpdate,
)
from campus_events.schemas.common import UpdateSchema

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "college.create": CollegeCreate,
    "college.filters": CollegeFilters,
    "student.create": StudentCreate,
    "student.update": StudentUpdate,
    "student.filters": StudentFilters,
    "event.create": EventCreate,
    "event.update": EventUpdate,
    "event.filters": EventFilters,
    "registration.create": RegistrationCreate,
    "registration.update": RegistrationUpdate,
    "registration.filters": RegistrationFilters,
    "attendance.create": AttendanceCreate,
    "attendance.update": AttendanceUpdate,
    "attendance.filters": AttendanceFilters,
    "feedback.create": FeedbackCreate,
    "feedback.filters": FeedbackFilters,
    "auth.register": RegisterRequest,
    "auth.login": LoginRequest,
    "auth.change_password": ChangePasswordRequest,
    "auth.profile_update": ProfileUpdate,
    "auth.forgot_password": ForgotPasswordRequest,
    "auth.refresh": RefreshRequest,
}


@dataclass
class ValidationResult:
    value: Optional[Dict[str, Any]] = None
    errors: List[Dict[str, str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def format_errors(exc: ValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors into field/message pairs"""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": location or "body", "message": message})
    return errors


def validate(schema_name: str, data: Any) -> ValidationResult:
    """Validate raw input against a named schema"""
    schema = SCHEMAS[schema_name]

    if not isinstance(data, dict):
        return ValidationResult(errors=[{"field": "body", "message": "Request body must be a JSON object"}])

    try:
        model = schema.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(errors=format_errors(exc))

    partial = isinstance(model, UpdateSchema)
    return ValidationResult(value=model.model_dump(exclude_unset=partial))


def require_valid(schema_name: str, data: Any) -> Dict[str, Any]:
    """Validate or raise ValidationFailed carrying the error list"""
    result = validate(schema_name, data)
    if not result.is_valid:
        raise ValidationFailed(result.errors)
    return result.value
