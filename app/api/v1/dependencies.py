"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the shared collaborators and the use cases.
The document store and message bus are created once in the lifespan and
kept on app.state; use cases are built per request around them. Routes
depend only on these dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces.services import IDocumentStore, IMessageBus
from app.application.services.event_publisher import EventPublisher
from app.application.use_cases.tasks import TaskLifecycleService
from app.application.use_cases.users import CreateUserUseCase
from app.core.config import get_settings
from app.domain.exceptions import ServiceNotConfiguredException
from app.infrastructure.repositories import TaskRepository, UserRepository
from app.infrastructure.services.existence_checker import ExistenceChecker


def get_document_store(request: Request) -> IDocumentStore:
    """Shared document store from app.state; 503 if startup could not build it."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise ServiceNotConfiguredException("Document store")
    return store


def get_message_bus(request: Request) -> IMessageBus:
    """Shared message bus from app.state; 503 if startup could not build it."""
    bus = getattr(request.app.state, "message_bus", None)
    if bus is None:
        raise ServiceNotConfiguredException("Message bus")
    return bus


def get_task_lifecycle_service(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    bus: Annotated[IMessageBus, Depends(get_message_bus)],
) -> TaskLifecycleService:
    """Build TaskLifecycleService around the shared store and bus."""
    settings = get_settings()
    return TaskLifecycleService(
        task_repo=TaskRepository(store),
        existence=ExistenceChecker(store),
        publisher=EventPublisher(bus),
        task_created_topic=settings.task_created_topic,
    )


def get_create_user_use_case(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> CreateUserUseCase:
    """Build CreateUserUseCase around the shared store."""
    return CreateUserUseCase(
        user_repo=UserRepository(store),
        existence=ExistenceChecker(store),
    )
