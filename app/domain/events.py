"""Lifecycle event envelopes exchanged over the message bus.

Events are immutable snapshots. TaskCreatedEvent is published by this
service; TaskCompletedEvent and UserCreatedEvent arrive from other services
(their inbound HTTP shapes live in app.schemas).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.entities.task import TaskEntity


@dataclass(frozen=True)
class TaskCreatedEvent:
    """Emitted after a new task has been persisted."""

    task: TaskEntity

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON publish."""
        return {"task": self.task.to_dict()}


@dataclass(frozen=True)
class TaskCompletedEvent:
    """Completion report for a task (worker -> coordinator)."""

    user_id: str
    task_id: str
    status: str
    result: Any = None


@dataclass(frozen=True)
class UserCreatedEvent:
    """A user was registered by the account service."""

    user_id: str
