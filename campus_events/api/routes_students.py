"""
Student routes
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from campus_events.api.deps import require_permission
from campus_events.core.db import get_db
from campus_events.core.exceptions import NotFoundError
from campus_events.core.permissions import DELETE, READ, WRITE
from campus_events.models import Student
from campus_events.repositories import StudentRepo
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

router = APIRouter()


@router.get("")
async def list_students(
    request: Request,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("students", READ))
):
    """List students; `search` matches name or email"""
    filters = require_valid("student.filters", dict(request.query_params))
    students = StudentRepo.list(db, filters)
    return success_response("Students retrieved successfully", [s.to_dict() for s in students])


@router.post("", status_code=201)
async def create_student(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("students", WRITE))
):
    data = require_valid("student.create", payload)
    student = StudentRepo.create(db, Student.create(data))
    return success_response("Student created successfully", student.to_dict())


@router.get("/{student_id}")
async def get_student(
    student_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("students", READ))
):
    student = StudentRepo.get_by_id(db, student_id)
    return success_response("Student retrieved successfully", student.to_dict())


@router.put("/{student_id}")
async def update_student(
    student_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("students", WRITE))
):
    changes = require_valid("student.update", payload)
    student = StudentRepo.update(db, student_id, changes)
    return success_response("Student updated successfully", student.to_dict())


@router.delete("/{student_id}")
async def delete_student(
    student_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("students", DELETE))
):
    """Delete a student together with their registrations, attendance and feedback"""
    if not StudentRepo.delete(db, student_id):
        raise NotFoundError("Student", student_id)
    return success_response("Student deleted successfully")
