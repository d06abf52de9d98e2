"""Redis Pub/Sub message bus for lifecycle events.

Publishes serialized lifecycle events on a channel per topic (e.g.
"TaskCreatedEvent"). Unlike a best-effort notifier, publish failures are
raised so the caller can report them.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from app.core.config import Settings

logger = logging.getLogger(__name__)


class MessageBusUnavailableError(Exception):
    """Raised when publishing while the Redis connection is not established."""


class _RedisPubSubBase:
    """Shared Redis connection logic for the message bus."""

    def __init__(
        self,
        settings: Settings,
        redis_client: redis.Redis | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = settings
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis pub/sub connected")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis pub/sub connection failed: %s", e)
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis pub/sub disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None


class RedisMessageBus(_RedisPubSubBase):
    """Publishes payloads to the Redis channel named after the topic."""

    async def publish(self, topic: str, payload: str) -> None:
        """Publish payload on the topic channel.

        Args:
            topic: Channel name (lifecycle event type).
            payload: Serialized JSON event.

        Raises:
            MessageBusUnavailableError: If Redis is not connected.
            redis.RedisError: If the PUBLISH command fails.
        """
        if not self.is_available() or self.redis is None:
            raise MessageBusUnavailableError("Redis pub/sub is not connected")
        receivers = await self.redis.publish(topic, payload)
        logger.debug("Published to %s (%d subscribers)", topic, receivers)
