"""
Authentication Pydantic schemas
"""

from typing import Optional
from pydantic import EmailStr, Field

from campus_events.core.config import settings
from campus_events.models.admin import Role
from .common import RequestSchema, UpdateSchema

USERNAME_PATTERN = r"^[a-zA-Z0-9_]{3,20}$"

class RegisterRequest(RequestSchema):
    username: str = Field(..., pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH, max_length=128)
    role: Role = Role.ADMIN

class LoginRequest(RequestSchema):
    identifier: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class ChangePasswordRequest(RequestSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH, max_length=128)

class ProfileUpdate(UpdateSchema):
    not_null = ("username", "email")

    username: Optional[str] = Field(None, pattern=USERNAME_PATTERN)
    email: Optional[EmailStr] = None

class ForgotPasswordRequest(RequestSchema):
    email: EmailStr

class RefreshRequest(RequestSchema):
    refresh_token: str = Field(..., min_length=1)
