"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.entities.task import TaskEntity


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task repository (DIP). Every call is scoped by user_id."""

    def scope_for(self, user_id: str) -> str:
        """Return the parent path for user_id's tasks (raises ScopeResolutionException)."""

    async def create(self, user_id: str, task: TaskEntity) -> TaskEntity:
        """Insert a new task; raise TaskAlreadyExistsException on id collision."""

    async def get_by_id(self, user_id: str, task_id: str) -> TaskEntity | None:
        """Return task by id within the user's scope."""

    async def update_fields(
        self,
        user_id: str,
        task_id: str,
        field_mask: Iterable[str],
        partial: dict[str, Any],
    ) -> TaskEntity:
        """Apply a masked update; raise ResourceNotFoundException if missing."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def create_user(self, user_id: str) -> None:
        """Insert the user document; raise UserAlreadyExistsException if present."""
