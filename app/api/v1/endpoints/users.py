"""User API: registration from UserCreatedEvent and per-user task reads."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import (
    get_create_user_use_case,
    get_task_lifecycle_service,
)
from app.application.use_cases.tasks import TaskLifecycleService
from app.application.use_cases.users import CreateUserUseCase
from app.domain.events import UserCreatedEvent
from app.schemas.task import TaskResponse
from app.schemas.user import UserCreatedRequest, UserCreatedResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserCreatedResponse, status_code=201)
async def create_user(
    body: UserCreatedRequest,
    use_case: Annotated[CreateUserUseCase, Depends(get_create_user_use_case)],
):
    """Create the user document; 409 if the user already exists."""
    logger.debug("Create user request: user=%s", body.user.user_id)
    await use_case.execute(UserCreatedEvent(user_id=body.user.user_id))
    return UserCreatedResponse()


@router.get("/{user_id}/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    user_id: str,
    task_id: str,
    svc: Annotated[TaskLifecycleService, Depends(get_task_lifecycle_service)],
):
    """Return one of the user's tasks; 404 if the user or task is missing."""
    task = await svc.get_task(user_id, task_id)
    return TaskResponse.from_entity(task)
