"""Service interfaces (ports) for the application layer.

Protocols define contracts for the external collaborators (DIP): the
document store and the message bus. Both are long-lived handles shared by
concurrent requests; the core never mutates them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol


# Document store interface
class IDocumentStore(Protocol):
    """Protocol for a hierarchical document store (Firestore-style paths).

    parent is a path returned by parent_path() or None for top-level
    collections. Connectivity failures raise StoreUnavailableException;
    a missing document is never an error on reads.
    """

    def parent_path(self, collection: str, document_id: str) -> str:
        """Return the path of document_id in collection, usable as a parent.

        Raises ScopeResolutionException if document_id is not a valid segment.
        """

    async def exists(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> bool:
        """Return True if the document is present."""

    async def insert(
        self,
        collection: str,
        document_id: str,
        document: dict[str, Any],
        parent: str | None = None,
    ) -> None:
        """Create the document; raise DocumentAlreadyExistsException if present."""

    async def get_by_id(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> dict[str, Any] | None:
        """Return the document fields, or None if not found."""

    async def update_fields(
        self,
        collection: str,
        document_id: str,
        field_mask: Iterable[str],
        partial: dict[str, Any],
        parent: str | None = None,
    ) -> dict[str, Any] | None:
        """Write only field_mask fields of partial; return the full updated document.

        Returns None (and writes nothing) if the document does not exist.
        """


# Existence checker interface
class IExistenceChecker(Protocol):
    """Protocol for user/task presence checks (not found is False, not an error)."""

    async def user_exists(self, user_id: str) -> bool:
        """Return True if the user exists."""

    async def task_exists(self, task_id: str, parent: str) -> bool:
        """Return True if the task exists under the parent scope."""


# Message bus interface
class IMessageBus(Protocol):
    """Protocol for a topic-based publish operation."""

    async def publish(self, topic: str, payload: str) -> None:
        """Publish a serialized payload; raise on failure."""


# Lifecycle event publisher interface
class IEventPublisher(Protocol):
    """Protocol for publishing lifecycle events (serialization + bus)."""

    async def publish(self, topic: str, event: Any, **context: Any) -> None:
        """Serialize event.to_dict() and publish it to topic; raise EventPublishException."""
