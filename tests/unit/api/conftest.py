"""Fixtures for API unit tests: FarmService over in-memory stores, fresh metrics, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from farm.main import app


@pytest.fixture
def app_with_overrides(farm_service, metrics):
    """App with FarmService and metrics overridden so tests never touch a database."""
    from farm.api import dependencies

    app.dependency_overrides[dependencies.get_farm_service] = lambda: farm_service
    app.dependency_overrides[dependencies.get_metrics] = lambda: metrics
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
