"""Task repository over a document store (implements ITaskRepository).

Tasks live in the tasks subcollection of their owner's user document, so a
task id only has to be unique per user. Updates go through an explicit
field mask; fields outside the mask are never written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from app.application.interfaces.services import IDocumentStore
from app.core.path_validation import validate_document_id
from app.domain.entities.task import TASK_FIELDS, TaskEntity
from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    ResourceNotFoundException,
    TaskAlreadyExistsException,
)
from app.infrastructure.firebase.collections import COLLECTION_TASKS, COLLECTION_USERS

logger = logging.getLogger(__name__)


class TaskRepository:
    """Task repository. Same contract for the Firestore and in-memory stores."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def scope_for(self, user_id: str) -> str:
        """Return the parent path of user_id's tasks (users/{user_id})."""
        return self._store.parent_path(COLLECTION_USERS, user_id)

    async def create(self, user_id: str, task: TaskEntity) -> TaskEntity:
        """Insert task under the user's scope.

        Raises:
            ScopeResolutionException: If user_id cannot form a parent path.
            TaskAlreadyExistsException: If a concurrent request created the same id.
        """
        parent = self.scope_for(user_id)
        try:
            await self._store.insert(
                COLLECTION_TASKS, task.task_id, task.to_document(), parent=parent
            )
        except DocumentAlreadyExistsException:
            logger.warning(
                "Task %s for user %s was created concurrently", task.task_id, user_id
            )
            raise TaskAlreadyExistsException(user_id, task.task_id) from None
        return task

    async def get_by_id(self, user_id: str, task_id: str) -> TaskEntity | None:
        """Return task by id within the user's scope (None for ids no document can have)."""
        try:
            validate_document_id(task_id)
        except ValueError:
            return None
        doc = await self._store.get_by_id(
            COLLECTION_TASKS, task_id, parent=self.scope_for(user_id)
        )
        if doc is None:
            return None
        return TaskEntity.from_document(doc)

    async def update_fields(
        self,
        user_id: str,
        task_id: str,
        field_mask: Iterable[str],
        partial: dict[str, Any],
    ) -> TaskEntity:
        """Write only the masked fields of partial; return the stored result.

        Raises:
            ValueError: If the mask is empty or names a field tasks do not have.
            ResourceNotFoundException: If the task does not exist.
        """
        mask = frozenset(field_mask)
        if not mask:
            raise ValueError("field mask must name at least one field")
        unknown = mask - TASK_FIELDS
        if unknown:
            raise ValueError(f"Unknown task fields in mask: {sorted(unknown)}")
        updated = await self._store.update_fields(
            COLLECTION_TASKS,
            task_id,
            mask,
            {k: v for k, v in partial.items() if k in mask},
            parent=self.scope_for(user_id),
        )
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        return TaskEntity.from_document(updated)
