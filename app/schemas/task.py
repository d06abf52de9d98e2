"""Task API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskStatus


class CreateTaskRequest(BaseModel):
    """Request body for creating a task (CreateTaskCommand)."""

    user_id: str = Field(..., min_length=1, description="Owning user id")
    task_id: str = Field(
        ..., min_length=1, description="Caller-supplied id, unique per user"
    )
    object_path: str = Field(..., description="Location of the external artifact")
    task_data: dict[str, Any] | None = Field(
        default=None, description="Opaque task payload; defaults to {}"
    )


class TaskCompletedRequest(BaseModel):
    """Request body for a worker's completion report (TaskCompletedEvent).

    status is a plain string so unknown values reach the service and are
    rejected with INVALID_TASK_STATUS (400) rather than a 422.
    """

    user_id: str = Field(..., min_length=1)
    task_id: str = Field(..., min_length=1)
    status: str = Field(..., description=f"One of: {', '.join(TaskStatus.values())}")
    result: Any = Field(default=None, description="Opaque result payload")


class TaskResponse(BaseModel):
    """Task in create/get/complete responses."""

    task_id: str
    data: dict[str, Any]
    object_path: str
    created_by: str
    status: TaskStatus
    result: Any = None
    duration_seconds: int
    created_at: datetime
    updated_at: datetime
    last_publish_time: datetime | None = None

    @classmethod
    def from_entity(cls, task: TaskEntity) -> "TaskResponse":
        return cls(**task.to_document())


class TaskUpdatedResponse(BaseModel):
    """Response for POST /tasks/complete."""

    status: str = Field(default="Task updated")
    task: TaskResponse
