"""Task lifecycle use cases: create (publishes) and complete (persists).

Each operation runs its steps strictly in order and stops at the first
failure: existence checks, status validation, persist, then publish. A
publish is never attempted unless the persist returned successfully, and
a persisted change is not undone when the publish fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from app.application.dtos.task import CreateTaskCommand
from app.application.interfaces.repositories import ITaskRepository
from app.application.interfaces.services import IEventPublisher, IExistenceChecker
from app.domain.entities.task import COMPLETION_FIELD_MASK, TaskEntity
from app.domain.enums import TaskStatus
from app.domain.events import TaskCompletedEvent, TaskCreatedEvent
from app.domain.exceptions import (
    ResourceNotFoundException,
    ScopeResolutionException,
    TaskAlreadyExistsException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class TaskLifecycleService:
    """Sequences existence checks, validation, persistence and publishing.

    Holds no state between calls; collaborators are shared handles.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        existence: IExistenceChecker,
        publisher: IEventPublisher,
        *,
        task_created_topic: str = "TaskCreatedEvent",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._existence = existence
        self._publisher = publisher
        self._task_created_topic = task_created_topic
        self._clock = clock

    async def _require_user_scope(self, user_id: str) -> str:
        """Check the user exists, then resolve its parent path."""
        if not await self._existence.user_exists(user_id):
            logger.warning("User not found: %s", user_id)
            raise ResourceNotFoundException("user", user_id)
        try:
            return self._task_repo.scope_for(user_id)
        except ScopeResolutionException:
            logger.error("Failed to get parent path for user %s", user_id)
            raise

    @traced("task_lifecycle.create_task")
    async def create_task(self, command: CreateTaskCommand) -> TaskEntity:
        """Create a queued task and publish TaskCreatedEvent.

        Args:
            command: user_id, task_id, object_path and optional task_data.

        Returns:
            The persisted task.

        Raises:
            ResourceNotFoundException: If the user does not exist.
            ScopeResolutionException: If the user id cannot form a parent path.
            TaskAlreadyExistsException: If the task id is taken in the user's scope.
            StoreUnavailableException: If the store fails (nothing is published).
            EventPublishException: If the task was stored but the event was not
                published; details include persisted=True.
        """
        logger.debug("Create task request: %s", command)
        add_span_attributes(user_id=command.user_id, task_id=command.task_id)
        parent = await self._require_user_scope(command.user_id)

        if await self._existence.task_exists(command.task_id, parent):
            logger.warning(
                "Task %s already exists for user %s", command.task_id, command.user_id
            )
            raise TaskAlreadyExistsException(command.user_id, command.task_id)

        task = TaskEntity.new(
            task_id=command.task_id,
            user_id=command.user_id,
            object_path=command.object_path,
            data=command.task_data,
            now=self._clock(),
        )
        created = await self._task_repo.create(command.user_id, task)
        logger.info("Task created: %s (user %s)", created.task_id, command.user_id)

        await self._publisher.publish(
            self._task_created_topic,
            TaskCreatedEvent(task=created),
            user_id=command.user_id,
            task_id=created.task_id,
            persisted=True,
        )
        return created

    @traced("task_lifecycle.task_complete")
    async def task_complete(self, event: TaskCompletedEvent) -> TaskEntity:
        """Record a worker's completion report with a field-masked update.

        Only status, result, duration_seconds, updated_at and
        last_publish_time are written. No event is published here.

        Raises:
            InvalidTaskStatusException: If event.status is not a known status
                (checked first; nothing is read or written).
            ResourceNotFoundException: If the user or the task does not exist.
            ScopeResolutionException: If the user id cannot form a parent path.
            StoreUnavailableException: If the store fails.
        """
        logger.info("Task completion received: %s", event)
        status = TaskStatus.parse(event.status)
        add_span_attributes(
            user_id=event.user_id, task_id=event.task_id, status=status.value
        )
        parent = await self._require_user_scope(event.user_id)

        if not await self._existence.task_exists(event.task_id, parent):
            logger.error("Failed to find task: %s", event.task_id)
            raise ResourceNotFoundException("task", event.task_id)

        updated = await self._task_repo.update_fields(
            event.user_id,
            event.task_id,
            COMPLETION_FIELD_MASK,
            TaskEntity.completion_update(status, event.result, self._clock()),
        )
        logger.info("Task updated: %s -> %s", updated.task_id, updated.status.value)
        return updated

    @traced("task_lifecycle.get_task")
    async def get_task(self, user_id: str, task_id: str) -> TaskEntity:
        """Return a user's task.

        Raises:
            ResourceNotFoundException: If the user or the task does not exist.
        """
        await self._require_user_scope(user_id)
        task = await self._task_repo.get_by_id(user_id, task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task
