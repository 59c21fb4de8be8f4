"""
Tests for named-schema validation
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from campus_events.core.exceptions import ValidationFailed
from campus_events.services.validation import require_valid, validate


def future(days=3):
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def event_payload(**overrides):
    data = {
        "title": "  Robotics Workshop  ",
        "description": "Build a line-following robot",
        "date": future(),
        "location": "Lab 3",
        "max_attendees": 40,
        "college_id": str(uuid.uuid4()),
    }
    data.update(overrides)
    return data


def fields(result):
    return {error["field"] for error in result.errors}


def test_event_create_normalizes_value():
    """Strings are trimmed, defaults applied and unknown fields dropped"""
    result = validate("event.create", event_payload(unexpected="x"))

    assert result.is_valid
    assert result.value["title"] == "Robotics Workshop"
    assert result.value["status"] == "scheduled"
    assert "unexpected" not in result.value


def test_event_date_must_be_future():
    past = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()
    result = validate("event.create", event_payload(date=past))

    assert not result.is_valid
    assert "date" in fields(result)


def test_event_capacity_and_uuid_rules():
    result = validate("event.create", event_payload(max_attendees=0, college_id="not-a-uuid"))

    assert fields(result) == {"max_attendees", "college_id"}


def test_missing_required_fields_reported_together():
    result = validate("college.create", {})

    assert not result.is_valid
    assert fields(result) == {"name"}


def test_college_optional_formats():
    result = validate("college.create", {"name": "Hill College", "contact_email": "nope", "phone": "12"})

    assert fields(result) == {"contact_email", "phone"}


@pytest.mark.parametrize("rating", [0, 6, "five", 4.5, True, "4"])
def test_feedback_rating_out_of_bounds(rating):
    result = validate("feedback.create", {
        "student_id": str(uuid.uuid4()),
        "event_id": str(uuid.uuid4()),
        "rating": rating,
    })

    assert "rating" in fields(result)


def test_attendance_check_out_before_check_in():
    check_in = datetime(2026, 3, 1, 10, 0)
    result = validate("attendance.create", {
        "student_id": str(uuid.uuid4()),
        "event_id": str(uuid.uuid4()),
        "status": "present",
        "check_in_time": check_in.isoformat(),
        "check_out_time": (check_in - timedelta(minutes=5)).isoformat(),
    })

    assert not result.is_valid
    assert result.errors[0]["message"] == "Check-out time must be after check-in time"


def test_update_requires_one_field():
    result = validate("student.update", {})

    assert not result.is_valid
    assert result.errors[0]["message"] == "At least one field must be provided for update"


def test_update_returns_only_supplied_fields():
    result = validate("student.update", {"name": "Priya Raman"})

    assert result.value == {"name": "Priya Raman"}


def test_update_rejects_null_for_required_column():
    result = validate("event.update", {"title": None})

    assert result.errors == [{"field": "title", "message": "may not be null"}]


def test_update_allows_null_for_optional_column():
    result = validate("student.update", {"phone": None})

    assert result.value == {"phone": None}


def test_non_object_body():
    result = validate("auth.login", ["admin", "secret"])

    assert result.errors == [{"field": "body", "message": "Request body must be a JSON object"}]


def test_unknown_schema_raises():
    with pytest.raises(KeyError):
        validate("nothing.here", {})


def test_require_valid_raises_with_errors():
    with pytest.raises(ValidationFailed) as exc_info:
        require_valid("auth.register", {"username": "ab", "email": "admin@college.edu", "password": "secret123"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.errors[0]["field"] == "username"
