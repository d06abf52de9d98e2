"""Tests for task endpoints (create, complete) over the in-memory backends."""

from httpx import AsyncClient

from app.infrastructure.memory import InMemoryDocumentStore, InMemoryMessageBus


async def _create_user(client: AsyncClient, user_id: str = "u1") -> None:
    response = await client.post("/api/v1/users", json={"user": {"user_id": user_id}})
    assert response.status_code == 201


async def _create_task(client: AsyncClient, **overrides):
    body = {"user_id": "u1", "task_id": "t1", "object_path": "gs://x"}
    body.update(overrides)
    return await client.post("/api/v1/tasks", json=body)


async def test_create_task_returns_201_and_publishes(
    client: AsyncClient, bus: InMemoryMessageBus
) -> None:
    await _create_user(client)

    response = await _create_task(client, task_data={"input": "a.csv"})

    assert response.status_code == 201
    data = response.json()
    assert data["task_id"] == "t1"
    assert data["status"] == "Queued"
    assert data["created_by"] == "u1"
    assert data["data"] == {"input": "a.csv"}
    assert data["result"] is None
    assert data["duration_seconds"] == 0
    assert data["created_at"] == data["updated_at"]
    [message] = bus.on_topic("TaskCreatedEvent")
    assert message.json()["task"]["task_id"] == "t1"


async def test_create_task_defaults_data(client: AsyncClient) -> None:
    await _create_user(client)
    response = await _create_task(client)
    assert response.json()["data"] == {}


async def test_create_task_unknown_user_returns_404(
    client: AsyncClient, bus: InMemoryMessageBus
) -> None:
    response = await _create_task(client)
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "RESOURCE_NOT_FOUND"
    assert body["details"]["resource_type"] == "user"
    assert bus.messages == []


async def test_create_task_twice_returns_409(
    client: AsyncClient, store: InMemoryDocumentStore, bus: InMemoryMessageBus
) -> None:
    await _create_user(client)
    assert (await _create_task(client)).status_code == 201

    response = await _create_task(client, object_path="gs://other")

    assert response.status_code == 409
    assert response.json()["error"] == "TASK_ALREADY_EXISTS"
    assert store.document_count("tasks", parent="users/u1") == 1
    assert len(bus.messages) == 1


async def test_create_task_invalid_task_id_returns_400(client: AsyncClient) -> None:
    await _create_user(client)
    response = await _create_task(client, task_id="a/b")
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_task_missing_fields_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/tasks", json={"user_id": "u1"})
    assert response.status_code == 422


async def test_create_task_publish_failure_returns_500_after_persist(
    client: AsyncClient, store: InMemoryDocumentStore, bus: InMemoryMessageBus
) -> None:
    await _create_user(client)
    bus.fail_with = ConnectionError("bus down")

    response = await _create_task(client)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "EVENT_PUBLISH_FAILED"
    assert body["details"]["persisted"] is True
    assert await store.exists("tasks", "t1", parent="users/u1")


async def test_complete_task_returns_updated_task(
    client: AsyncClient, store: InMemoryDocumentStore, bus: InMemoryMessageBus
) -> None:
    await _create_user(client)
    await _create_task(client)

    response = await client.post(
        "/api/v1/tasks/complete",
        json={"user_id": "u1", "task_id": "t1", "status": "Completed", "result": {"ok": True}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Task updated"
    assert body["task"]["status"] == "Completed"
    assert body["task"]["result"] == {"ok": True}
    assert body["task"]["object_path"] == "gs://x"
    assert body["task"]["last_publish_time"] is None
    stored = await store.get_by_id("tasks", "t1", parent="users/u1")
    assert stored["status"] == "Completed"
    assert [m.topic for m in bus.messages] == ["TaskCreatedEvent"]


async def test_complete_unknown_task_returns_404(client: AsyncClient) -> None:
    await _create_user(client)
    response = await client.post(
        "/api/v1/tasks/complete",
        json={"user_id": "u1", "task_id": "never", "status": "Completed"},
    )
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "task"


async def test_complete_unknown_user_returns_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tasks/complete",
        json={"user_id": "ghost", "task_id": "t1", "status": "Running"},
    )
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "user"


async def test_complete_bogus_status_returns_400_without_mutation(
    client: AsyncClient, store: InMemoryDocumentStore
) -> None:
    await _create_user(client)
    await _create_task(client)
    before = await store.get_by_id("tasks", "t1", parent="users/u1")

    response = await client.post(
        "/api/v1/tasks/complete",
        json={"user_id": "u1", "task_id": "t1", "status": "BOGUS"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_TASK_STATUS"
    assert "Completed" in body["details"]["allowed"]
    assert await store.get_by_id("tasks", "t1", parent="users/u1") == before
