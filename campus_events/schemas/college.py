"""
College-related Pydantic schemas
"""

from typing import Optional
from pydantic import EmailStr, Field

from .common import PaginationParams, PhoneStr, RequestSchema

class CollegeCreate(RequestSchema):
    """Schema for creating a college"""
    name: str = Field(..., min_length=3, max_length=200)
    address: Optional[str] = Field(None, min_length=10, max_length=500)
    contact_email: Optional[EmailStr] = None
    phone: Optional[PhoneStr] = None

class CollegeFilters(PaginationParams):
    search: Optional[str] = Field(None, max_length=100)
