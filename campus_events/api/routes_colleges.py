"""
College routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.permissions import READ, WRITE
from campus_events.models import College
from campus_events.repositories import CollegeRepo
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

router = APIRouter()


@router.get("")
async def list_colleges(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("colleges", READ))
):
    """List colleges, optionally filtered by name search"""
    filters = require_valid("college.filters", dict(request.query_params))
    colleges = CollegeRepo.list(db, filters)
    return success_response("Colleges retrieved successfully", [c.to_dict() for c in colleges])


@router.post("", status_code=201)
async def create_college(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("colleges", WRITE))
):
    """Create a college"""
    data = require_valid("college.create", payload)
    college = CollegeRepo.create(db, College.create(data))
    return success_response("College created successfully", college.to_dict())


@router.get("/{college_id}")
async def get_college(
    college_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("colleges", READ))
):
    college = CollegeRepo.get_by_id(db, college_id)
    return success_response("College retrieved successfully", college.to_dict())
