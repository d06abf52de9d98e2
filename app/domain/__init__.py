"""Domain layer: entities, events, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import TaskEntity
from app.domain.enums import TaskStatus
from app.domain.events import TaskCompletedEvent, TaskCreatedEvent, UserCreatedEvent
from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    EventPublishException,
    InvalidTaskStatusException,
    ResourceNotFoundException,
    ScopeResolutionException,
    ServiceNotConfiguredException,
    StoreUnavailableException,
    TaskAlreadyExistsException,
    TaskCoordinatorException,
    UserAlreadyExistsException,
    ValidationException,
)

__all__ = [
    "DocumentAlreadyExistsException",
    "EventPublishException",
    "InvalidTaskStatusException",
    "ResourceNotFoundException",
    "ScopeResolutionException",
    "ServiceNotConfiguredException",
    "StoreUnavailableException",
    "TaskAlreadyExistsException",
    "TaskCompletedEvent",
    "TaskCoordinatorException",
    "TaskCreatedEvent",
    "TaskEntity",
    "TaskStatus",
    "UserAlreadyExistsException",
    "UserCreatedEvent",
    "ValidationException",
]
