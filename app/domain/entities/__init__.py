"""Domain entities.

Pure domain models; no persistence concerns beyond document mapping.
"""

from app.domain.entities.task import TaskEntity

__all__ = ["TaskEntity"]
