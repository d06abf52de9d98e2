"""Task lifecycle use cases."""

from app.application.use_cases.tasks.task_lifecycle import TaskLifecycleService

__all__ = ["TaskLifecycleService"]
