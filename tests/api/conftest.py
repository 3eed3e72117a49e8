"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from kycgate.api.main import app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async client against the ASGI app; overrides are cleared afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def override():
    """Register a dependency override for the current test."""

    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value
        return value

    return _override
