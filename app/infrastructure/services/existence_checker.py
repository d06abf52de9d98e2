"""Existence checks for users and tasks (pure store reads).

A missing document is a valid False. Store failures propagate as
StoreUnavailableException and are never read as "does not exist".
"""

from __future__ import annotations

from app.application.interfaces.services import IDocumentStore
from app.core.path_validation import validate_document_id
from app.infrastructure.firebase.collections import COLLECTION_TASKS, COLLECTION_USERS


def _is_segment(document_id: str) -> bool:
    """An id that is not a single path segment cannot name a stored document."""
    try:
        validate_document_id(document_id)
    except ValueError:
        return False
    return True


class ExistenceChecker:
    """Answers "is it there?" for users and for tasks within a user scope."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def user_exists(self, user_id: str) -> bool:
        """Return True if users/{user_id} exists."""
        if not _is_segment(user_id):
            return False
        return await self._store.exists(COLLECTION_USERS, user_id)

    async def task_exists(self, task_id: str, parent: str) -> bool:
        """Return True if task_id exists under parent (a user scope path)."""
        if not _is_segment(task_id):
            return False
        return await self._store.exists(COLLECTION_TASKS, task_id, parent=parent)
