"""Domain exceptions for the task coordinator.

Defines domain-level exceptions that represent business rule violations
and collaborator failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class TaskCoordinatorException(Exception):
    """Base exception for all task coordinator errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the structured error payload sent to clients."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskCoordinatorException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidTaskStatusException(TaskCoordinatorException):
    """Raised when a reported status is not a member of TaskStatus."""

    def __init__(self, status: str, allowed: list[str]) -> None:
        """Initialize with the rejected status and the accepted values.

        Args:
            status: The status value that was rejected.
            allowed: All recognized status values.
        """
        super().__init__(
            f"Invalid task status: {status!r}",
            "INVALID_TASK_STATUS",
            {"status": status, "allowed": allowed},
        )


class ResourceNotFoundException(TaskCoordinatorException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TaskAlreadyExistsException(TaskCoordinatorException):
    """Raised when creating a task whose id already exists for the user."""

    def __init__(self, user_id: str, task_id: str) -> None:
        super().__init__(
            f"Task already exists: {task_id}",
            "TASK_ALREADY_EXISTS",
            {"user_id": user_id, "task_id": task_id},
        )


class UserAlreadyExistsException(TaskCoordinatorException):
    """Raised when the user-created handler sees a user that is already stored."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            f"User already exists: {user_id}",
            "USER_ALREADY_EXISTS",
            {"user_id": user_id},
        )


class DocumentAlreadyExistsException(TaskCoordinatorException):
    """Raised by a document store when a create-only insert hits an existing id.

    Repositories translate this into the resource-specific conflict.
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Document already exists: {path}",
            "DOCUMENT_ALREADY_EXISTS",
            {"path": path},
        )


class ScopeResolutionException(TaskCoordinatorException):
    """Raised when a parent path cannot be derived (e.g. malformed user id)."""

    def __init__(self, collection: str, document_id: str, reason: str) -> None:
        """Initialize with the parent collection, id, and reason.

        Args:
            collection: Parent collection (e.g. 'users').
            document_id: The id that could not be used as a path segment.
            reason: Human-readable reason.
        """
        super().__init__(
            f"Failed to get parent path: {reason}",
            "SCOPE_RESOLUTION_ERROR",
            {"collection": collection, "document_id": document_id, "reason": reason},
        )


class StoreUnavailableException(TaskCoordinatorException):
    """Raised when the document store cannot be reached or rejects a request."""

    def __init__(self, operation: str, cause: str) -> None:
        """Initialize with the attempted operation and underlying cause.

        Args:
            operation: Store operation (e.g. 'get', 'insert', 'update').
            cause: String form of the underlying error.
        """
        super().__init__(
            f"Document store {operation} failed: {cause}",
            "STORE_UNAVAILABLE",
            {"operation": operation, "cause": cause},
        )


class EventPublishException(TaskCoordinatorException):
    """Raised when a lifecycle event could not be handed to the message bus.

    The store write preceding the publish is not rolled back; details
    carry ``persisted`` so callers know the side effect may have happened.
    """

    def __init__(
        self,
        topic: str,
        cause: str,
        **details_extra: Any,
    ) -> None:
        """Initialize with topic and cause.

        Args:
            topic: Topic the event was published to.
            cause: String form of the underlying error.
            **details_extra: Optional keys merged into details (e.g. task_id, persisted).
        """
        details = {"topic": topic, "cause": cause, **details_extra}
        super().__init__(
            f"Failed to publish {topic}: {cause}",
            "EVENT_PUBLISH_FAILED",
            details,
        )


class ServiceNotConfiguredException(TaskCoordinatorException):
    """Raised when a collaborator (store or bus) was not initialized at startup."""

    def __init__(self, service: str) -> None:
        super().__init__(
            message=f"{service} is not configured.",
            error_code="SERVICE_UNAVAILABLE",
            details={"service": service},
        )
