"""Pytest fixtures and configuration for hourblocks tests."""

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hourblocks.database.database import Base
from hourblocks.database.hour_repository import HourRepository
from hourblocks.engine.day_grid import week_days
from hourblocks.engine.hour_map import build_hour_map
from hourblocks.models.hour_entry import HourEntry


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    from hourblocks.database.models import HourEntryDB  # noqa: F401

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def hour_repository(db_session: Session):
    """Create an HourRepository instance for testing."""
    return HourRepository(db_session)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def week_start():
    """A Monday (2024-01-01)."""
    return date(2024, 1, 1)


@pytest.fixture
def week(week_start):
    """The 7 days of the test week."""
    return week_days(week_start)


@pytest.fixture
def make_hour_map(week):
    """Build an hour map for one project from per-day planned/recorded lists."""
    def _make(project_id="proj-a", planned=None, recorded=None, days=None):
        days = days or week
        planned = planned or [0] * len(days)
        recorded = recorded or [None] * len(days)
        rows = [
            HourEntry(project_id=project_id, date=d, planned_hours=p, recorded_hours=r)
            for d, p, r in zip(days, planned, recorded)
            if p or r
        ]
        return build_hour_map(rows)

    return _make


class FakeHourStore:
    """In-memory write collaborator that can be told to fail on given days."""

    def __init__(self, fail_on=None):
        self.fail_on = set(fail_on or [])
        self.writes = []
        self.deletes = []

    def write(self, request):
        if request.date in self.fail_on:
            raise RuntimeError(f"write rejected for {request.date.isoformat()}")
        self.writes.append(request)

    def delete(self, project_id, dates, mode):
        if self.fail_on.intersection(dates):
            raise RuntimeError("delete rejected")
        self.deletes.append((project_id, list(dates), mode))


@pytest.fixture
def fake_store():
    return FakeHourStore()


@pytest.fixture
def failing_store(week):
    """Store whose writes fail on the third day of the test week."""
    return FakeHourStore(fail_on=[week[2]])


@pytest.fixture
def test_client(db_session: Session, test_user_id):
    """Create a FastAPI test client with overridden database dependency and user."""
    from hourblocks.api.app import app
    from hourblocks.database.database import get_db
    from hourblocks.api.dependencies import get_current_user_id

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    def override_get_current_user_id():
        return test_user_id

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = override_get_current_user_id

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
