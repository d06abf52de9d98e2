"""Pytest configuration and fixtures for the task coordinator.

HTTP tests run app.main:app over ASGITransport with the in-memory document
store and message bus placed on app.state (ASGITransport does not run the
lifespan). The environment is pinned to the memory backends before the app
is imported so Settings validation needs no credentials.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["EVENT_BUS_BACKEND"] = "memory"
os.environ.pop("TASK_CREATED_TOPIC", None)

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.memory import (  # noqa: E402
    InMemoryDocumentStore,
    InMemoryMessageBus,
)
from app.main import app  # noqa: E402

USER_ID = "u1"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def bus() -> InMemoryMessageBus:
    """Fresh in-memory message bus recording every publish."""
    return InMemoryMessageBus()


@pytest.fixture
async def seeded_store(store: InMemoryDocumentStore) -> InMemoryDocumentStore:
    """Store that already holds users/u1."""
    await store.insert("users", USER_ID, {"tasks": []})
    return store


@pytest.fixture
async def client(store: InMemoryDocumentStore, bus: InMemoryMessageBus) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) wired to the fixtures."""
    app.state.document_store = store
    app.state.message_bus = bus
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.document_store = None
    app.state.message_bus = None
