"""Domain enumerations for the task coordinator.

Enums represent fixed sets of domain values (e.g. task status).
"""

from enum import Enum

from app.domain.exceptions import InvalidTaskStatusException


class TaskStatus(str, Enum):
    """Task lifecycle status.

    Queued -> Running -> Completed | Failed. New tasks always start as
    QUEUED; completion reports are only checked for membership, not for
    adjacency to the current status.
    """

    QUEUED = "Queued"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value: str) -> "TaskStatus":
        """Return the member for value.

        Args:
            value: Status string as reported by a worker.

        Raises:
            InvalidTaskStatusException: If value is not a known status.
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidTaskStatusException(str(value), cls.values()) from None
