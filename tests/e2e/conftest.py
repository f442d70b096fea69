"""E2E test fixtures for API layer testing."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.infrastructure.api.main import create_app
from src.infrastructure.config import reset_settings
from src.infrastructure.stores import api_key_store, in_memory_alert_store

TEST_API_KEY = "test-api-key-123456789"


@pytest.fixture
def app() -> FastAPI:
    """Provide a fresh application with empty stores.

    A new app per test also means a new rate limiter, so tests don't
    interfere with each other. Settings are reloaded lazily, which lets a
    test adjust them with monkeypatch.setenv before its first request.
    """
    reset_settings()
    in_memory_alert_store.clear_all()
    api_key_store.clear_api_keys()

    application = create_app()
    yield application

    application.dependency_overrides.clear()
    in_memory_alert_store.clear_all()
    api_key_store.clear_api_keys()
    reset_settings()


@pytest.fixture
def test_api_key() -> str:
    """Register a test API key for user-123 / account-456 and return the raw key."""
    api_key_store.register_api_key(
        raw_key=TEST_API_KEY,
        name="test-key",
        user_id="user-123",
        account_id="account-456",
    )
    return TEST_API_KEY


@pytest_asyncio.fixture
async def async_client(
    app: FastAPI, test_api_key: str
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing the API."""
    transport = ASGITransport(app=app)

    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"Authorization": f"Bearer {test_api_key}"},
    ) as client:
        yield client


@pytest_asyncio.fixture
async def async_client_no_auth(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client without authentication."""
    transport = ASGITransport(app=app)

    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as client:
        yield client
