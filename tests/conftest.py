"""
Shared fixtures for the registration service test suite.

The database URL is pointed at a throwaway SQLite file *before* anything from
``app`` is imported, since the engine is built at import time.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone

_DB_DIR = tempfile.mkdtemp(prefix="registration-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ADMIN_ROLE"] = "ADMIN"

import pytest
from fastapi.testclient import TestClient

from app.core.permissions import Requester
from app.db.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.services.registration_service import RegistrationService


class FakeClock:
    """Deterministic clock; every call moves time forward by one second."""

    def __init__(self, start: datetime = datetime(2025, 5, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        self.calls += 1
        return self.now


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db, clock):
    return RegistrationService(db, clock=clock)


@pytest.fixture
def user_one():
    return Requester.from_headers("U1", "USER")


@pytest.fixture
def user_two():
    return Requester.from_headers("U2", "USER")


@pytest.fixture
def admin():
    return Requester.from_headers("admin-1", "ADMIN,USER")


@pytest.fixture
def client(db):
    def _get_test_db():
        yield db

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
