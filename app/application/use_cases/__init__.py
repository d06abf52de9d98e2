"""Application use cases: one entry point per workflow."""

from app.application.use_cases.tasks import TaskLifecycleService
from app.application.use_cases.users import CreateUserUseCase

__all__ = [
    "CreateUserUseCase",
    "TaskLifecycleService",
]
