"""Process-local implementations of the store and bus ports."""

from app.infrastructure.memory.document_store import InMemoryDocumentStore
from app.infrastructure.memory.message_bus import InMemoryMessageBus, PublishedMessage

__all__ = [
    "InMemoryDocumentStore",
    "InMemoryMessageBus",
    "PublishedMessage",
]
