"""End-to-end lifecycle scenarios over the in-memory store and bus.

Exercises the real repository, existence checker and publisher so the
observable store and bus state can be asserted after each step.
"""

from datetime import UTC, datetime

import pytest

from app.application.dtos.task import CreateTaskCommand
from app.application.services.event_publisher import EventPublisher
from app.application.use_cases.tasks import TaskLifecycleService
from app.application.use_cases.users import CreateUserUseCase
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskStatus
from app.domain.events import TaskCompletedEvent, UserCreatedEvent
from app.domain.exceptions import (
    EventPublishException,
    InvalidTaskStatusException,
    ResourceNotFoundException,
    TaskAlreadyExistsException,
    UserAlreadyExistsException,
)
from app.infrastructure.memory import InMemoryDocumentStore, InMemoryMessageBus
from app.infrastructure.repositories import TaskRepository, UserRepository
from app.infrastructure.services import ExistenceChecker


@pytest.fixture
def service(store: InMemoryDocumentStore, bus: InMemoryMessageBus) -> TaskLifecycleService:
    return TaskLifecycleService(
        TaskRepository(store), ExistenceChecker(store), EventPublisher(bus)
    )


@pytest.fixture
def create_user(store: InMemoryDocumentStore) -> CreateUserUseCase:
    return CreateUserUseCase(UserRepository(store), ExistenceChecker(store))


def _create_t1() -> CreateTaskCommand:
    return CreateTaskCommand(user_id="u1", task_id="t1", object_path="gs://x")


async def test_scenario_a_create_user_then_task(
    service, create_user, store, bus
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    assert await store.get_by_id("users", "u1") == {"tasks": []}

    task = await service.create_task(_create_t1())

    assert task.status is TaskStatus.QUEUED
    assert task.created_by == "u1"
    [message] = bus.on_topic("TaskCreatedEvent")
    assert message.json()["task"]["task_id"] == "t1"
    assert message.json()["task"]["status"] == "Queued"


async def test_scenario_b_duplicate_create_conflicts(
    service, create_user, store, bus
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    await service.create_task(_create_t1())

    with pytest.raises(TaskAlreadyExistsException):
        await service.create_task(_create_t1())

    assert store.document_count("tasks", parent="users/u1") == 1
    assert len(bus.messages) == 1


async def test_scenario_c_completion_preserves_creation_fields(
    service, create_user, store, bus
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    created = await service.create_task(
        CreateTaskCommand("u1", "t1", "gs://x", task_data={"input": "a.csv"})
    )

    updated = await service.task_complete(
        TaskCompletedEvent("u1", "t1", "Completed", {"ok": True})
    )

    assert updated.status is TaskStatus.COMPLETED
    assert updated.result == {"ok": True}
    stored = await store.get_by_id("tasks", "t1", parent="users/u1")
    assert stored["status"] == "Completed"
    assert stored["result"] == {"ok": True}
    assert stored["object_path"] == "gs://x"
    assert stored["created_by"] == "u1"
    assert stored["data"] == {"input": "a.csv"}
    assert stored["created_at"] == created.created_at
    # completion is not re-published
    assert [m.topic for m in bus.messages] == ["TaskCreatedEvent"]


async def test_scenario_d_complete_unknown_task(service, create_user) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.task_complete(TaskCompletedEvent("u1", "never", "Completed"))
    assert exc_info.value.details["resource_type"] == "task"


async def test_scenario_e_bogus_status_leaves_task_unchanged(
    service, create_user, store
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    await service.create_task(_create_t1())
    before = await store.get_by_id("tasks", "t1", parent="users/u1")

    with pytest.raises(InvalidTaskStatusException):
        await service.task_complete(TaskCompletedEvent("u1", "t1", "BOGUS"))

    after = await store.get_by_id("tasks", "t1", parent="users/u1")
    assert after == before
    assert after["status"] == "Queued"


async def test_same_task_id_allowed_for_different_users(
    service, create_user, store
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    await create_user.execute(UserCreatedEvent("u2"))
    await service.create_task(_create_t1())
    await service.create_task(CreateTaskCommand("u2", "t1", "gs://y"))
    assert store.document_count("tasks", parent="users/u1") == 1
    assert store.document_count("tasks", parent="users/u2") == 1


async def test_publish_failure_keeps_persisted_task(
    service, create_user, store, bus
) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    bus.fail_with = ConnectionError("bus down")

    with pytest.raises(EventPublishException) as exc_info:
        await service.create_task(_create_t1())

    assert exc_info.value.details["persisted"] is True
    assert await store.exists("tasks", "t1", parent="users/u1")
    bus.fail_with = None
    with pytest.raises(TaskAlreadyExistsException):
        await service.create_task(_create_t1())


async def test_create_user_twice_conflicts(create_user, store) -> None:
    await create_user.execute(UserCreatedEvent("u1"))
    with pytest.raises(UserAlreadyExistsException):
        await create_user.execute(UserCreatedEvent("u1"))
    assert store.document_count("users") == 1


async def test_completion_clears_last_publish_time_and_moves_updated_at(
    create_user, store, bus
) -> None:
    created_at = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
    published_at = datetime(2024, 5, 1, 12, 0, 5, tzinfo=UTC)
    completed_at = datetime(2024, 5, 1, 13, 30, 0, 750000, tzinfo=UTC)
    await create_user.execute(UserCreatedEvent("u1"))
    seeded = TaskEntity.new("t1", "u1", "gs://x", {"input": "a.csv"}, created_at)
    seeded.last_publish_time = published_at
    await store.insert("tasks", "t1", seeded.to_document(), parent="users/u1")
    service = TaskLifecycleService(
        TaskRepository(store),
        ExistenceChecker(store),
        EventPublisher(bus),
        clock=lambda: completed_at,
    )

    updated = await service.task_complete(
        TaskCompletedEvent("u1", "t1", "Failed", {"error": "oom"})
    )

    stored = await store.get_by_id("tasks", "t1", parent="users/u1")
    assert stored["last_publish_time"] is None
    assert stored["updated_at"] == datetime(2024, 5, 1, 13, 30, 0, tzinfo=UTC)
    assert stored["created_at"] == created_at
    assert stored["status"] == "Failed"
    assert updated.last_publish_time is None
    assert updated.updated_at == stored["updated_at"]
