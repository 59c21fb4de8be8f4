"""
Student-related Pydantic schemas
"""

from typing import Optional
from pydantic import EmailStr, Field

from .common import PaginationParams, PhoneStr, RequestSchema, UpdateSchema, UUIDStr

class StudentCreate(RequestSchema):
    """Schema for creating a student"""
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=100)
    phone: Optional[PhoneStr] = None
    roll_number: Optional[str] = Field(None, max_length=50)
    department: Optional[str] = Field(None, max_length=100)
    college_id: UUIDStr

class StudentUpdate(UpdateSchema):
    """Schema for updating a student"""
    not_null = ("email", "name", "college_id")

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[PhoneStr] = None
    roll_number: Optional[str] = Field(None, max_length=50)
    department: Optional[str] = Field(None, max_length=100)
    college_id: Optional[UUIDStr] = None

class StudentFilters(PaginationParams):
    college_id: Optional[UUIDStr] = None
    department: Optional[str] = None
    search: Optional[str] = Field(None, max_length=100)
