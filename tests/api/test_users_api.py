"""Tests for user endpoints (create user, read task)."""

from httpx import AsyncClient

from app.infrastructure.memory import InMemoryDocumentStore


async def test_create_user_returns_201(
    client: AsyncClient, store: InMemoryDocumentStore
) -> None:
    response = await client.post("/api/v1/users", json={"user": {"user_id": "u1"}})
    assert response.status_code == 201
    assert response.json() == {"status": "User created successfully"}
    assert await store.get_by_id("users", "u1") == {"tasks": []}


async def test_create_existing_user_returns_409(client: AsyncClient) -> None:
    await client.post("/api/v1/users", json={"user": {"user_id": "u1"}})
    response = await client.post("/api/v1/users", json={"user": {"user_id": "u1"}})
    assert response.status_code == 409
    assert response.json()["error"] == "USER_ALREADY_EXISTS"


async def test_create_user_malformed_id_returns_500(client: AsyncClient) -> None:
    """An id that cannot form users/{id} is a scope resolution failure."""
    response = await client.post("/api/v1/users", json={"user": {"user_id": "a/b"}})
    assert response.status_code == 500
    assert response.json()["error"] == "SCOPE_RESOLUTION_ERROR"


async def test_create_user_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users", json={})
    assert response.status_code == 422


async def test_get_task(client: AsyncClient) -> None:
    await client.post("/api/v1/users", json={"user": {"user_id": "u1"}})
    await client.post(
        "/api/v1/tasks",
        json={"user_id": "u1", "task_id": "t1", "object_path": "gs://x"},
    )

    response = await client.get("/api/v1/users/u1/tasks/t1")

    assert response.status_code == 200
    assert response.json()["object_path"] == "gs://x"
    assert response.json()["status"] == "Queued"


async def test_get_task_missing(client: AsyncClient) -> None:
    await client.post("/api/v1/users", json={"user": {"user_id": "u1"}})
    response = await client.get("/api/v1/users/u1/tasks/t1")
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "task"

    response = await client.get("/api/v1/users/ghost/tasks/t1")
    assert response.status_code == 404
    assert response.json()["details"]["resource_type"] == "user"
