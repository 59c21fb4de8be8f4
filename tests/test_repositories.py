"""
Tests for the persistence layer
"""

from datetime import timedelta
from unittest import mock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from campus_events.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    PersistenceError,
)
from campus_events.models import Attendance, Feedback, Registration, Student
from campus_events.repositories import (
    AttendanceRepo,
    CollegeRepo,
    EventRepo,
    FeedbackRepo,
    RegistrationRepo,
    StudentRepo,
)
from campus_events.utils.clock import utcnow


def test_student_round_trip_through_college(db_session, college):
    """A student created under a college is listed by that college's filter"""
    student = StudentRepo.create(db_session, Student.create({
        "name": "Asha Verma",
        "email": "asha@riverside.edu",
        "college_id": college.id,
    }))

    listed = StudentRepo.list(db_session, {"college_id": college.id})
    assert [s.id for s in listed] == [student.id]
    fetched = StudentRepo.get_by_id(db_session, student.id)
    assert fetched.email == "asha@riverside.edu"
    assert fetched.college_id == college.id


def test_student_requires_existing_college(db_session):
    with pytest.raises(NotFoundError, match="College not found"):
        StudentRepo.create(db_session, Student.create({
            "name": "Asha Verma",
            "email": "asha@riverside.edu",
            "college_id": "00000000-0000-4000-8000-000000000000",
        }))


def test_student_email_conflict(db_session, make_student):
    make_student(1)
    with pytest.raises(ConflictError):
        make_student(2, email="student1@riverside.edu")


def test_student_search_is_case_insensitive(db_session, make_student):
    make_student(1, name="Maya Iyer")
    make_student(2, name="Rohan Das")

    found = StudentRepo.list(db_session, {"search": "IYER"})
    assert [s.name for s in found] == ["Maya Iyer"]


def test_find_and_get_by_id(db_session):
    assert CollegeRepo.find_by_id(db_session, "missing") is None
    with pytest.raises(NotFoundError):
        CollegeRepo.get_by_id(db_session, "missing")


def test_events_ordered_by_date_with_pagination(db_session, make_event):
    later = make_event("Later Talk", date=utcnow() + timedelta(days=20))
    sooner = make_event("Sooner Talk", date=utcnow() + timedelta(days=2))

    assert [e.id for e in EventRepo.list(db_session)] == [sooner.id, later.id]
    assert [e.id for e in EventRepo.list(db_session, {"limit": 1, "offset": 1})] == [later.id]


def test_duplicate_active_registration(db_session, student, event):
    RegistrationRepo.create(db_session, Registration.create({"student_id": student.id, "event_id": event.id}))

    with pytest.raises(ConflictError, match="already registered"):
        RegistrationRepo.create(db_session, Registration.create({"student_id": student.id, "event_id": event.id}))


def test_cancelled_registration_allows_new_one(db_session, student, event):
    first = RegistrationRepo.create(db_session, Registration.create({
        "student_id": student.id, "event_id": event.id, "status": "cancelled",
    }))
    second = RegistrationRepo.create(db_session, Registration.create({"student_id": student.id, "event_id": event.id}))

    assert first.id != second.id
    with pytest.raises(ConflictError):
        RegistrationRepo.update(db_session, first.id, {"status": "confirmed"})


def test_feedback_rating_range_filter(db_session, make_student, event):
    for index, rating in enumerate([1, 3, 5], start=1):
        student = make_student(index)
        FeedbackRepo.create(db_session, Feedback.create({
            "student_id": student.id, "event_id": event.id, "rating": rating,
        }))

    ratings = sorted(f.rating for f in FeedbackRepo.list(db_session, {"min_rating": 2, "max_rating": 5}))
    assert ratings == [3, 5]


def test_update_and_delete(db_session, student):
    updated = StudentRepo.update(db_session, student.id, {"department": "Physics"})
    assert updated.department == "Physics"

    assert StudentRepo.delete(db_session, student.id) is True
    assert StudentRepo.delete(db_session, student.id) is False


def test_store_failure_becomes_persistence_error(db_session):
    with mock.patch.object(db_session, "query", side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))):
        with pytest.raises(PersistenceError, match="Failed to fetch college"):
            CollegeRepo.list(db_session)


def test_active_registration_unique_in_database(db_session, student, event):
    """Two live registrations for one pair are refused even without the repository check"""
    pair = {"student_id": student.id, "event_id": event.id}
    db_session.add_all([Registration.create(pair), Registration.create(pair)])

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_duplicate_attendance_rejected(db_session, student, event):
    record = {"student_id": student.id, "event_id": event.id, "status": "present"}
    AttendanceRepo.create(db_session, Attendance.create(record))

    with pytest.raises(ConflictError, match="already checked in"):
        AttendanceRepo.create(db_session, Attendance.create(record))
    assert AttendanceRepo.count(db_session, {"event_id": event.id}) == 1


def test_null_for_required_column_is_client_error(db_session, student):
    with pytest.raises(DomainValidationError):
        StudentRepo.update(db_session, student.id, {"name": None})

    assert StudentRepo.get_by_id(db_session, student.id).name == "Student 1"


def test_search_matches_wildcards_literally(db_session, make_student):
    make_student(1, name="Top_Scorer")
    make_student(2, name="Top Scorer")

    found = StudentRepo.list(db_session, {"search": "top_"})
    assert [s.name for s in found] == ["Top_Scorer"]
    assert CollegeRepo.list(db_session, {"search": "%"}) == []
