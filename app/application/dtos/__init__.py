"""Application DTOs (no persistence dependency)."""

from app.application.dtos.task import CreateTaskCommand

__all__ = ["CreateTaskCommand"]
