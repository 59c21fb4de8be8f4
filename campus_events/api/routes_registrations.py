"""
Registration routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.exceptions import NotFoundError
from campus_events.core.permissions import DELETE, READ, WRITE
from campus_events.models import Registration
from campus_events.repositories import RegistrationRepo
from campus_events.services.notification_service import notification_service
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

router = APIRouter()


@router.get("")
async def list_registrations(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("registrations", READ))
):
    """List registrations, newest first"""
    filters = require_valid("registration.filters", dict(request.query_params))
    registrations = RegistrationRepo.list(db, filters)
    return success_response("Registrations retrieved successfully", [r.to_dict() for r in registrations])


@router.post("", status_code=201)
async def create_registration(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("registrations", WRITE))
):
    """Register a student for an event; one active registration per pair"""
    data = require_valid("registration.create", payload)
    registration = RegistrationRepo.create(db, Registration.create(data))

    notification_service.send_registration_confirmation(registration.student, registration.event)
    return success_response("Registration created successfully", registration.to_dict())


@router.get("/{registration_id}")
async def get_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("registrations", READ))
):
    registration = RegistrationRepo.get_by_id(db, registration_id)
    return success_response("Registration retrieved successfully", registration.to_dict())


@router.put("/{registration_id}")
async def update_registration(
    registration_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("registrations", WRITE))
):
    changes = require_valid("registration.update", payload)
    registration = RegistrationRepo.update(db, registration_id, changes)
    return success_response("Registration updated successfully", registration.to_dict())


@router.delete("/{registration_id}")
async def delete_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("registrations", DELETE))
):
    if not RegistrationRepo.delete(db, registration_id):
        raise NotFoundError("Registration", registration_id)
    return success_response("Registration deleted successfully")
