"""Messaging: Redis pub/sub message bus for lifecycle events."""

from app.infrastructure.messaging.redis_pubsub import (
    MessageBusUnavailableError,
    RedisMessageBus,
)

__all__ = [
    "MessageBusUnavailableError",
    "RedisMessageBus",
]
