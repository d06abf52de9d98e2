"""Pydantic request/response schemas for the HTTP API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.task import (
    CreateTaskRequest,
    TaskCompletedRequest,
    TaskResponse,
    TaskUpdatedResponse,
)
from app.schemas.user import UserCreatedRequest, UserCreatedResponse, UserRef

__all__ = [
    "CreateTaskRequest",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "TaskCompletedRequest",
    "TaskResponse",
    "TaskUpdatedResponse",
    "UserCreatedRequest",
    "UserCreatedResponse",
    "UserRef",
]
