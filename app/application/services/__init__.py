"""Application services: event publishing."""

from app.application.services.event_publisher import EventPublisher

__all__ = ["EventPublisher"]
