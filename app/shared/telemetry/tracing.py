"""Span helpers for use-case code: the traced decorator and attribute setters."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_tracer = trace.get_tracer("app")

# Argument names copied onto spans. Task payloads and results never are.
_SPAN_ARG_ALLOWLIST = frozenset({
    "user_id", "task_id", "status", "topic", "collection", "operation",
})


def _record_args(span: trace.Span, func: Callable, args: tuple, kwargs: dict) -> None:
    """Copy allowlisted call arguments (positional or keyword) onto span."""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return
    for name, value in bound.arguments.items():
        if name in _SPAN_ARG_ALLOWLIST and isinstance(value, (str, int, float, bool)):
            span.set_attribute(f"arg.{name}", value)


def _mark_failed(span: trace.Span, exc: Exception) -> None:
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, type(exc).__name__))


def traced(operation_name: str | None = None, attributes: dict | None = None) -> Callable:
    """Run the decorated function (sync or async) inside a new span.

    The span is named operation_name (default module.qualname), carries
    attributes, and is marked ERROR with the exception recorded when the
    call raises.
    """

    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        def _start():
            return _tracer.start_as_current_span(
                name,
                attributes=attributes,
                record_exception=False,
                set_status_on_exception=False,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _start() as span:
                    _record_args(span, func, args, kwargs)
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        _mark_failed(span, e)
                        raise

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _start() as span:
                _record_args(span, func, args, kwargs)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    _mark_failed(span, e)
                    raise

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span when it is being recorded."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def get_trace_id() -> str | None:
    """Return the current trace id as 32 hex chars, or None outside a trace."""
    ctx = trace.get_current_span().get_span_context()
    return format(ctx.trace_id, "032x") if ctx.is_valid else None
