"""DTOs for task use cases (no dependency on HTTP schemas)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CreateTaskCommand:
    """Request to create a task on behalf of a user."""

    user_id: str
    task_id: str
    object_path: str
    task_data: dict[str, Any] | None = None
