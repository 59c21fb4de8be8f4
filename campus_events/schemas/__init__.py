"""
Pydantic schemas package
"""

from .common import *
from .college import *
from .student import *
from .event import *
from .registration import *
from .attendance import *
from .feedback import *
from .auth import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "PaginationParams",
    "CollegeCreate",
    "CollegeFilters",
    "StudentCreate",
    "StudentUpdate",
    "StudentFilters",
    "EventCreate",
    "EventUpdate",
    "EventFilters",
    "RegistrationCreate",
    "RegistrationUpdate",
    "RegistrationFilters",
    "AttendanceCreate",
    "AttendanceUpdate",
    "AttendanceFilters",
    "FeedbackCreate",
    "FeedbackFilters",
    "RegisterRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "ProfileUpdate",
    "ForgotPasswordRequest",
    "RefreshRequest",
]
