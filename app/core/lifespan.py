"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the long-lived collaborators
(document store, message bus, telemetry) onto app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: document store, message bus. Telemetry is set up in
    create_app (instrumentation adds middleware, which must precede startup).
    Shutdown order: message bus disconnect, Firestore HTTP pool close,
    telemetry shutdown. Collaborators already placed on app.state (tests)
    are left as they are.
    """
    settings = get_settings()

    # ---- Startup ----
    firestore_client = None
    if getattr(app.state, "document_store", None) is None:
        if settings.database_backend == "firestore":
            from app.infrastructure.firebase import (
                FirestoreDocumentStore,
                create_firestore_client,
            )

            firestore_client = create_firestore_client(settings)
            app.state.document_store = (
                FirestoreDocumentStore(firestore_client) if firestore_client else None
            )
        else:
            from app.infrastructure.memory import InMemoryDocumentStore

            app.state.document_store = InMemoryDocumentStore()
            logger.warning("Using in-memory document store (data is not durable)")

    redis_bus = None
    if getattr(app.state, "message_bus", None) is None:
        if settings.event_bus_backend == "redis":
            from app.infrastructure.messaging import RedisMessageBus

            redis_bus = RedisMessageBus(settings)
            await redis_bus.connect()
            app.state.message_bus = redis_bus
        else:
            from app.infrastructure.memory import InMemoryMessageBus

            app.state.message_bus = InMemoryMessageBus()
            logger.warning("Using in-memory message bus (events stay in process)")

    yield

    # ---- Shutdown ----
    if redis_bus is not None:
        await redis_bus.disconnect()

    if firestore_client is not None:
        await firestore_client.aclose()
        logger.info("Firestore HTTP client closed")

    telemetry = getattr(app.state, "telemetry", None)
    if telemetry is not None:
        telemetry.shutdown()
