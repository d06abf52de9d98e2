"""Tests for RedisMessageBus with a mocked redis.asyncio client."""

from unittest.mock import AsyncMock, patch

import pytest
import redis.asyncio as redis

from app.core.config import get_settings
from app.infrastructure.messaging import MessageBusUnavailableError, RedisMessageBus


async def test_publish_uses_topic_as_channel() -> None:
    client = AsyncMock()
    client.publish.return_value = 2
    bus = RedisMessageBus(get_settings(), redis_client=client)

    await bus.publish("TaskCreatedEvent", '{"task": {}}')

    client.publish.assert_awaited_once_with("TaskCreatedEvent", '{"task": {}}')


async def test_publish_without_connection_raises() -> None:
    bus = RedisMessageBus(get_settings())
    assert bus.is_available() is False
    with pytest.raises(MessageBusUnavailableError):
        await bus.publish("TaskCreatedEvent", "{}")


async def test_publish_error_propagates() -> None:
    client = AsyncMock()
    client.publish.side_effect = redis.ConnectionError("reset")
    bus = RedisMessageBus(get_settings(), redis_client=client)
    with pytest.raises(redis.ConnectionError):
        await bus.publish("TaskCreatedEvent", "{}")


async def test_connect_failure_leaves_bus_unavailable() -> None:
    client = AsyncMock()
    client.ping.side_effect = redis.ConnectionError("refused")
    with patch(
        "app.infrastructure.messaging.redis_pubsub.redis.Redis", return_value=client
    ):
        bus = RedisMessageBus(get_settings())
        await bus.connect()
    assert bus.is_available() is False


async def test_connect_and_disconnect() -> None:
    client = AsyncMock()
    with patch(
        "app.infrastructure.messaging.redis_pubsub.redis.Redis", return_value=client
    ):
        bus = RedisMessageBus(get_settings())
        await bus.connect()
    assert bus.is_available() is True
    client.ping.assert_awaited_once()

    await bus.disconnect()
    client.aclose.assert_awaited_once()
    assert bus.is_available() is False
