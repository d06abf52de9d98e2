"""In-memory message bus for local runs and tests (implements IMessageBus)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedMessage:
    """A payload handed to the bus, in publish order."""

    topic: str
    payload: str

    def json(self) -> Any:
        return json.loads(self.payload)


class InMemoryMessageBus:
    """Records every publish; fail_with makes subsequent publishes raise."""

    def __init__(self) -> None:
        self.messages: list[PublishedMessage] = []
        self.fail_with: Exception | None = None

    async def publish(self, topic: str, payload: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.messages.append(PublishedMessage(topic, payload))
        logger.debug("Published to %s (%d bytes)", topic, len(payload))

    def on_topic(self, topic: str) -> list[PublishedMessage]:
        return [m for m in self.messages if m.topic == topic]
