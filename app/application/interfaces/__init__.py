"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    ITaskRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IDocumentStore,
    IEventPublisher,
    IExistenceChecker,
    IMessageBus,
)

__all__ = [
    "IDocumentStore",
    "IEventPublisher",
    "IExistenceChecker",
    "IMessageBus",
    "ITaskRepository",
    "IUserRepository",
]
