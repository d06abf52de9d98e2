"""Request context management using contextvars.

Async-safe storage for the request and correlation ids of the request
being served, so log records and error responses can carry them without
threading the request object through every layer.

Usage:
    bind_request_ids(request_id="abc", correlation_id="abc")
    correlation_id = get_correlation_id()
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the ids bound to the current request."""

    request_id: str | None
    correlation_id: str | None


def bind_request_id(request_id: str) -> Token:
    """Bind the request id for the current task. Returns a token for reset."""
    return _request_id.set(request_id)


def bind_correlation_id(correlation_id: str) -> Token:
    """Bind the correlation id for the current task. Returns a token for reset."""
    return _correlation_id.set(correlation_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def reset_correlation_id(token: Token) -> None:
    _correlation_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _request_id.get()


def get_correlation_id() -> str | None:
    """Return the current correlation id, or None outside a request."""
    return _correlation_id.get()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        request_id=_request_id.get(),
        correlation_id=_correlation_id.get(),
    )
