"""
Event routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.exceptions import NotFoundError
from campus_events.core.permissions import DELETE, READ, WRITE
from campus_events.models import Event
from campus_events.repositories import EventRepo
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

router = APIRouter()


@router.get("")
async def list_events(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("events", READ))
):
    """List events ordered by date"""
    filters = require_valid("event.filters", dict(request.query_params))
    events = EventRepo.list(db, filters)
    return success_response("Events retrieved successfully", [e.to_dict() for e in events])


@router.post("", status_code=201)
async def create_event(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("events", WRITE))
):
    """Create a new event"""
    data = require_valid("event.create", payload)
    event = EventRepo.create(db, Event.create(data))
    return success_response("Event created successfully", event.to_dict())


@router.get("/{event_id}")
async def get_event_details(
    event_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("events", READ))
):
    """Get event with its current registration figures"""
    event = EventRepo.get_by_id(db, event_id)
    registered = EventRepo.active_registration_count(db, event_id)

    data = event.to_dict()
    data.update({
        "registered_count": registered,
        "available_spots": event.available_spots(registered),
        "is_full": event.is_full(registered),
        "is_past": event.is_past(),
    })
    return success_response("Event retrieved successfully", data)


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("events", WRITE))
):
    changes = require_valid("event.update", payload)
    event = EventRepo.update(db, event_id, changes)
    return success_response("Event updated successfully", event.to_dict())


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("events", DELETE))
):
    if not EventRepo.delete(db, event_id):
        raise NotFoundError("Event", event_id)
    return success_response("Event deleted successfully")
