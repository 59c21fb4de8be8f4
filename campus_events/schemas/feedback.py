"""
Feedback-related Pydantic schemas
"""

from typing import Optional
from pydantic import Field, StrictInt, model_validator

from campus_events.models.feedback import MAX_RATING, MIN_RATING
from .common import PaginationParams, RequestSchema, UUIDStr

class FeedbackCreate(RequestSchema):
    """Schema for submitting feedback"""
    student_id: UUIDStr
    event_id: UUIDStr
    rating: StrictInt = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comments: Optional[str] = Field(None, max_length=2000)

class FeedbackFilters(PaginationParams):
    student_id: Optional[UUIDStr] = None
    event_id: Optional[UUIDStr] = None
    rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)
    min_rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)
    max_rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)

    @model_validator(mode="after")
    def check_range(self):
        if self.min_rating and self.max_rating and self.max_rating < self.min_rating:
            raise ValueError("max_rating must not be below min_rating")
        return self
