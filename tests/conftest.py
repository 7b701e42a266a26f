"""Shared pytest fixtures for unit and integration tests."""

import os

# Settings are read at import time; pin a quiet, deterministic test environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["STORE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.database import build_engine, build_session_factory, init_db
from app.main import app
from app.stores import memory_stores, sql_stores


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
def stores():
    """Fresh in-memory collections for one test."""
    return memory_stores()


@pytest.fixture
async def async_client(api_base: str, stores):
    """Async HTTP client bound to the app, backed by the ``stores`` fixture."""
    app.state.stores = stores
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
    app.state.stores = None


@pytest.fixture
async def database_stores():
    """SQL-backed collections on a private in-memory SQLite database."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield sql_stores(build_session_factory(engine))
    await engine.dispose()


@pytest.fixture
async def teacher_id(async_client: AsyncClient, api_base: str) -> str:
    """Create a teacher through the API and return its id."""
    resp = await async_client.post(
        f"{api_base}/teachers",
        json={
            "first_name": "Sarah",
            "last_name": "Johnson",
            "email": "sarah.johnson@school.edu",
            "specialization": "Mathematics",
        },
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]["id"]
