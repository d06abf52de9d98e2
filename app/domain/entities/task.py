"""Task domain entity.

Represents a task owned by a user, independent of persistence. The stored
document layout is the dict produced by to_document().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.core.path_validation import validate_document_id
from app.domain.enums import TaskStatus
from app.domain.exceptions import ValidationException

# Every field of the persisted task document.
TASK_FIELDS: frozenset[str] = frozenset({
    "task_id",
    "data",
    "object_path",
    "created_by",
    "status",
    "result",
    "duration_seconds",
    "created_at",
    "updated_at",
    "last_publish_time",
})

# Fields written when a worker reports completion. created_by, object_path,
# created_at and data are deliberately absent.
COMPLETION_FIELD_MASK: frozenset[str] = frozenset({
    "status",
    "result",
    "duration_seconds",
    "updated_at",
    "last_publish_time",
})


def truncate_to_seconds(value: datetime) -> datetime:
    """Drop sub-second precision (task timestamps have second resolution)."""
    return value.replace(microsecond=0)


@dataclass
class TaskEntity:
    """Domain entity for a task (SRP: business rules separate from persistence).

    task_id is unique only within the owning user's scope; created_by is
    the owning user id and never changes after creation.
    """

    task_id: str
    object_path: str
    created_by: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
    data: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    duration_seconds: int = 0
    last_publish_time: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        try:
            validate_document_id(self.task_id)
        except ValueError as e:
            raise ValidationException(f"Invalid task ID: {e}", field="task_id") from e
        if not self.created_by:
            raise ValidationException("Task owner is required", field="created_by")

    @classmethod
    def new(
        cls,
        task_id: str,
        user_id: str,
        object_path: str,
        data: dict[str, Any] | None,
        now: datetime,
    ) -> TaskEntity:
        """Build a freshly queued task; data defaults to an empty payload."""
        ts = truncate_to_seconds(now)
        return cls(
            task_id=task_id,
            object_path=object_path,
            created_by=user_id,
            status=TaskStatus.QUEUED,
            created_at=ts,
            updated_at=ts,
            data=dict(data) if data is not None else {},
        )

    @staticmethod
    def completion_update(
        status: TaskStatus, result: Any, now: datetime
    ) -> dict[str, Any]:
        """Return the partial document for COMPLETION_FIELD_MASK.

        duration_seconds is always 0; last_publish_time is cleared.
        """
        return {
            "status": status.value,
            "result": result,
            "duration_seconds": 0,
            "updated_at": truncate_to_seconds(now),
            "last_publish_time": None,
        }

    def to_document(self) -> dict[str, Any]:
        """Return the stored document (status as its string value)."""
        return {
            "task_id": self.task_id,
            "data": self.data,
            "object_path": self.object_path,
            "created_by": self.created_by,
            "status": self.status.value,
            "result": self.result,
            "duration_seconds": self.duration_seconds,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "last_publish_time": self.last_publish_time,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> TaskEntity:
        """Build an entity from a stored document; missing optionals get defaults."""
        return cls(
            task_id=doc.get("task_id", ""),
            object_path=doc.get("object_path", ""),
            created_by=doc.get("created_by", ""),
            status=TaskStatus.parse(doc.get("status", TaskStatus.QUEUED.value)),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
            data=doc.get("data") or {},
            result=doc.get("result"),
            duration_seconds=int(doc.get("duration_seconds") or 0),
            last_publish_time=doc.get("last_publish_time"),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready snapshot (ISO-8601 timestamps) for events and responses."""
        doc = self.to_document()
        for key in ("created_at", "updated_at", "last_publish_time"):
            if doc[key] is not None:
                doc[key] = doc[key].isoformat()
        return doc
