"""Store-backed repository implementations (Firestore or in-memory store)."""

from app.infrastructure.repositories.task_repo import TaskRepository
from app.infrastructure.repositories.user_repo import UserRepository

__all__ = [
    "TaskRepository",
    "UserRepository",
]
