"""Lifecycle event publisher: JSON serialization in front of the message bus."""

from __future__ import annotations

import json
import logging
from typing import Any

from app.application.interfaces.services import IMessageBus
from app.domain.exceptions import EventPublishException

logger = logging.getLogger(__name__)


class EventPublisher:
    """Serializes events and hands them to the bus; failures are raised.

    Callers invoke publish() only after the matching store write succeeded.
    """

    def __init__(self, bus: IMessageBus) -> None:
        self._bus = bus

    @staticmethod
    def serialize(event: Any) -> str:
        """Return the JSON payload for event (anything with to_dict())."""
        return json.dumps(event.to_dict(), default=str)

    async def publish(self, topic: str, event: Any, **context: Any) -> None:
        """Publish event to topic.

        Args:
            topic: Bus topic (e.g. "TaskCreatedEvent").
            event: Event exposing to_dict().
            **context: Extra keys added to the error details on failure.

        Raises:
            EventPublishException: If serialization or the bus publish fails.
        """
        try:
            payload = self.serialize(event)
            await self._bus.publish(topic, payload)
        except Exception as e:
            logger.error("Failed to publish %s: %s", topic, e)
            raise EventPublishException(topic, str(e), **context) from e
        logger.info("Published %s", topic)
