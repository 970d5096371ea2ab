"""
pytest configuration and shared fixtures for the Living Globe Trends API tests.

Key concern: tests must never reach the real X API. We achieve this by:
  1. Forcing X_API_KEY to empty BEFORE the app is imported, so the
     module-level snapshot cache starts in fallback mode.
  2. Building live-mode caches per test around httpx.MockTransport and
     injecting them with app.dependency_overrides.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ["X_API_KEY"] = ""
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture(autouse=True)
def reset_snapshot_cache():
    """Drop whatever the module-level cache holds between tests."""
    from globe_api.services.snapshot_cache import snapshot_cache

    snapshot_cache.clear()
    yield
    snapshot_cache.clear()


@pytest.fixture()
async def client():
    """
    HTTPX async test client wired to the FastAPI app.

    Usage:
        async def test_something(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from globe_api.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
