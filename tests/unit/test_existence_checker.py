"""Tests for ExistenceChecker."""

from unittest.mock import AsyncMock

import pytest

from app.domain.exceptions import StoreUnavailableException
from app.infrastructure.memory import InMemoryDocumentStore
from app.infrastructure.services import ExistenceChecker


async def test_user_exists(seeded_store: InMemoryDocumentStore) -> None:
    checker = ExistenceChecker(seeded_store)
    assert await checker.user_exists("u1") is True
    assert await checker.user_exists("u2") is False


async def test_task_exists_is_scoped(seeded_store: InMemoryDocumentStore) -> None:
    await seeded_store.insert("tasks", "t1", {"task_id": "t1"}, parent="users/u1")
    checker = ExistenceChecker(seeded_store)
    assert await checker.task_exists("t1", "users/u1") is True
    assert await checker.task_exists("t1", "users/u2") is False


@pytest.mark.parametrize("bad_id", ["", "a/b", "__name__"])
async def test_ids_that_cannot_name_a_document_do_not_exist(bad_id: str) -> None:
    store = AsyncMock()
    checker = ExistenceChecker(store)
    assert await checker.user_exists(bad_id) is False
    assert await checker.task_exists(bad_id, "users/u1") is False
    store.exists.assert_not_awaited()


async def test_store_failure_is_not_read_as_absent() -> None:
    store = AsyncMock()
    store.exists.side_effect = StoreUnavailableException("get", "refused")
    with pytest.raises(StoreUnavailableException):
        await ExistenceChecker(store).user_exists("u1")
