"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    EventPublishException,
    InvalidTaskStatusException,
    ResourceNotFoundException,
    ScopeResolutionException,
    ServiceNotConfiguredException,
    StoreUnavailableException,
    TaskAlreadyExistsException,
    TaskCoordinatorException,
    UserAlreadyExistsException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = TaskCoordinatorException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskCoordinatorException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    """to_dict() is the error body sent to clients."""
    exc = TaskCoordinatorException("Oops", error_code="CUSTOM", details={"k": "v"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"k": "v"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="task_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "task_id"}
    assert ValidationException("Invalid").details == {}


def test_invalid_task_status_exception_lists_allowed_values() -> None:
    exc = InvalidTaskStatusException("BOGUS", ["Queued", "Running"])
    assert exc.error_code == "INVALID_TASK_STATUS"
    assert exc.details == {"status": "BOGUS", "allowed": ["Queued", "Running"]}
    assert "BOGUS" in exc.message


def test_resource_not_found_exception() -> None:
    """ResourceNotFoundException includes resource_type and resource_id."""
    exc = ResourceNotFoundException("task", "t9")
    assert exc.message == "task not found: t9"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "task", "resource_id": "t9"}


def test_conflict_exceptions() -> None:
    task_exc = TaskAlreadyExistsException("u1", "t1")
    assert task_exc.error_code == "TASK_ALREADY_EXISTS"
    assert task_exc.details == {"user_id": "u1", "task_id": "t1"}

    user_exc = UserAlreadyExistsException("u1")
    assert user_exc.error_code == "USER_ALREADY_EXISTS"
    assert user_exc.details == {"user_id": "u1"}

    doc_exc = DocumentAlreadyExistsException("users/u1")
    assert doc_exc.error_code == "DOCUMENT_ALREADY_EXISTS"
    assert doc_exc.details == {"path": "users/u1"}


def test_scope_resolution_exception() -> None:
    exc = ScopeResolutionException("users", "a/b", "contains '/'")
    assert exc.error_code == "SCOPE_RESOLUTION_ERROR"
    assert exc.details["document_id"] == "a/b"
    assert exc.message.startswith("Failed to get parent path")


def test_store_unavailable_exception_carries_cause() -> None:
    exc = StoreUnavailableException("get", "connection refused")
    assert exc.error_code == "STORE_UNAVAILABLE"
    assert exc.details == {"operation": "get", "cause": "connection refused"}


def test_event_publish_exception_merges_context() -> None:
    """Extra keyword context (e.g. persisted) lands in details."""
    exc = EventPublishException("TaskCreatedEvent", "bus down", task_id="t1", persisted=True)
    assert exc.error_code == "EVENT_PUBLISH_FAILED"
    assert exc.details == {
        "topic": "TaskCreatedEvent",
        "cause": "bus down",
        "task_id": "t1",
        "persisted": True,
    }


def test_service_not_configured_exception() -> None:
    exc = ServiceNotConfiguredException("Message bus")
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.message == "Message bus is not configured."
