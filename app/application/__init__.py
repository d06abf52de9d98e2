"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (store, bus, repositories).
"""

from app.application.interfaces import (
    IDocumentStore,
    IEventPublisher,
    IExistenceChecker,
    IMessageBus,
    ITaskRepository,
    IUserRepository,
)

__all__ = [
    "IDocumentStore",
    "IEventPublisher",
    "IExistenceChecker",
    "IMessageBus",
    "ITaskRepository",
    "IUserRepository",
]
