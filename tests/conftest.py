"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- A store client backed by DATABASE_TEST_URL or in-memory SQLite
- A diagnosis service with a deterministic clock
- HTTP client for API testing
"""

import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from diagnosis_api.database import Database
from diagnosis_api.main import app
from diagnosis_api.routes.diagnoses import get_diagnosis_service
from diagnosis_api.services.diagnosis import DiagnosisService


class FakeClock:
    """Clock that advances one second per call, so every record is ordered."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


def _create_test_engine():
    """Engine for DATABASE_TEST_URL if set, otherwise a shared in-memory SQLite."""
    db_url = os.environ.get("DATABASE_TEST_URL")
    if db_url:
        return create_async_engine(db_url, echo=False)
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def database():
    """Store client with automatic schema management.

    Creates all tables before the test and drops them afterwards.
    """
    db = Database(_create_test_engine())
    await db.create_schema()

    yield db

    await db.drop_schema()
    await db.close()


@pytest_asyncio.fixture
async def empty_database():
    """Store client whose schema was never created, so every query fails."""
    db = Database(_create_test_engine())
    await db.drop_schema()
    yield db
    await db.close()


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock for predicted_date and updated_at."""
    return FakeClock()


@pytest.fixture
def service(database, clock) -> DiagnosisService:
    """Diagnosis service bound to the test database."""
    return DiagnosisService(database, clock=clock)


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(service):
    """Async test client for the FastAPI app with the test service injected."""
    app.dependency_overrides[get_diagnosis_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_diagnosis_service, None)


@pytest.fixture
def client_id() -> str:
    """Generate a unique client ID for testing."""
    return str(uuid.uuid4())
