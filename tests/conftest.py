"""
Shared fixtures.

Every test app runs against its own SQLite file, so tests never
share rows and never need a running PostgreSQL server.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

OWNER_ID = "test-owner"
OTHER_OWNER_ID = "other-owner"


def make_settings(tmp_path, **overrides) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    values = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'subtrack.db'}",
        "demo_user_id": OWNER_ID,
        "demo_user_email": "owner@example.com",
        "rate_limit_enabled": False,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def client(test_settings):
    """A TestClient with the lifespan running (database connected)."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def netflix_payload() -> dict:
    return {
        "name": "Netflix",
        "price": 13500,
        "billingCycle": "monthly",
        "nextBillingAt": "2025-12-16",
    }


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)
