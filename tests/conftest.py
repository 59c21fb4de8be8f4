"""
Shared fixtures: a throwaway SQLite database, a TestClient bound to it and
factories for the records most tests need.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_campus_events.db")
os.environ.setdefault("DATABASE_KEY", "test-database-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from campus_events.api.deps import rate_limit_store
from campus_events.core.db import Base, get_db
from campus_events.core.security import get_password_hash
from campus_events.models import Admin, College, Event, Student
from campus_events.repositories import AdminRepo, CollegeRepo, EventRepo, StudentRepo
from campus_events.services.auth_service import issue_tokens
from campus_events.utils.clock import utcnow
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """API client whose requests share the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    rate_limit_store.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        rate_limit_store.reset()


def _make_admin(db, username="admin_one", email="admin.one@college.edu", role="admin", is_active=True):
    admin = Admin.create({
        "username": username,
        "email": email,
        "password_hash": get_password_hash(PASSWORD),
        "role": role,
        "is_active": is_active,
    })
    return AdminRepo.create(db, admin)


def _auth_headers(admin):
    return {"Authorization": f"Bearer {issue_tokens(admin)['access_token']}"}


@pytest.fixture
def make_admin(db_session):
    """Factory for extra admins; password is PASSWORD"""
    def factory(*args, **kwargs):
        return _make_admin(db_session, *args, **kwargs)
    return factory


@pytest.fixture
def auth_headers():
    return _auth_headers


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def admin(db_session):
    return _make_admin(db_session)


@pytest.fixture
def super_admin(db_session):
    return _make_admin(db_session, "root_admin", "root@college.edu", role="super_admin")


@pytest.fixture
def headers(admin):
    return _auth_headers(admin)


@pytest.fixture
def college(db_session):
    return CollegeRepo.create(db_session, College.create({
        "name": "Riverside Institute of Technology",
        "address": "42 River Road, Springfield",
        "contact_email": "office@riverside.edu",
    }))


@pytest.fixture
def make_student(db_session, college):
    def factory(index=1, **overrides):
        data = {
            "name": f"Student {index}",
            "email": f"student{index}@riverside.edu",
            "college_id": college.id,
        }
        data.update(overrides)
        return StudentRepo.create(db_session, Student.create(data))
    return factory


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def make_event(db_session, college):
    def factory(title="Hackathon", **overrides):
        data = {
            "title": title,
            "description": "Twenty-four hour coding marathon",
            "date": utcnow() + timedelta(days=7),
            "location": "Main Hall",
            "max_attendees": 100,
            "college_id": college.id,
            "event_type": "competition",
        }
        data.update(overrides)
        return EventRepo.create(db_session, Event.create(data))
    return factory


@pytest.fixture
def event(make_event):
    return make_event()
