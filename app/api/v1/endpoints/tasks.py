"""Task API: thin routes delegating to TaskLifecycleService.

Domain exceptions raised by the service are turned into responses by the
handlers in app.core.exception_handlers.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_task_lifecycle_service
from app.application.dtos.task import CreateTaskCommand
from app.application.use_cases.tasks import TaskLifecycleService
from app.domain.events import TaskCompletedEvent
from app.schemas.task import (
    CreateTaskRequest,
    TaskCompletedRequest,
    TaskResponse,
    TaskUpdatedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: CreateTaskRequest,
    svc: Annotated[TaskLifecycleService, Depends(get_task_lifecycle_service)],
):
    """Create a queued task for a user and publish TaskCreatedEvent.

    404 if the user does not exist, 409 if the task id is taken for that
    user. A 500 with EVENT_PUBLISH_FAILED means the task WAS stored but the
    event may not have been delivered; retrying the create returns 409.
    """
    logger.debug("Create task request: user=%s task=%s", body.user_id, body.task_id)
    task = await svc.create_task(
        CreateTaskCommand(
            user_id=body.user_id,
            task_id=body.task_id,
            object_path=body.object_path,
            task_data=body.task_data,
        )
    )
    return TaskResponse.from_entity(task)


@router.post("/complete", response_model=TaskUpdatedResponse)
async def task_complete(
    body: TaskCompletedRequest,
    svc: Annotated[TaskLifecycleService, Depends(get_task_lifecycle_service)],
):
    """Record a worker's completion report (status, result) on the task.

    400 for an unknown status (nothing is written), 404 for an unknown user
    or task.
    """
    logger.debug(
        "Task completion report: user=%s task=%s status=%s",
        body.user_id,
        body.task_id,
        body.status,
    )
    task = await svc.task_complete(
        TaskCompletedEvent(
            user_id=body.user_id,
            task_id=body.task_id,
            status=body.status,
            result=body.result,
        )
    )
    return TaskUpdatedResponse(task=TaskResponse.from_entity(task))
