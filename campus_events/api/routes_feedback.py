"""
Feedback routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.exceptions import ConflictError
from campus_events.core.permissions import READ, WRITE
from campus_events.models import Feedback
from campus_events.repositories import FeedbackRepo
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

router = APIRouter()


@router.get("")
async def list_feedback(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("feedback", READ))
):
    """List feedback; `min_rating` / `max_rating` bound the rating"""
    filters = require_valid("feedback.filters", dict(request.query_params))
    entries = FeedbackRepo.list(db, filters)
    return success_response("Feedback retrieved successfully", [f.to_dict() for f in entries])


@router.post("", status_code=201)
async def submit_feedback(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("feedback", WRITE))
):
    data = require_valid("feedback.create", payload)
    if FeedbackRepo.find_for_student_event(db, data["student_id"], data["event_id"]):
        raise ConflictError("Feedback already submitted for this event")

    entry = FeedbackRepo.create(db, Feedback.create(data))
    return success_response("Feedback submitted successfully", entry.to_dict())
