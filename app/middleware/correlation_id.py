"""Correlation ID middleware.

A correlation id follows one logical operation across services (for example
a task created here and later completed by a worker). Forwarded from the
client when present, otherwise seeded from the request id. Must be added
after RequestIDMiddleware so it runs inside it.
"""

import uuid
from typing import Callable

from app.middleware.request_id import (
    accept_request_id,
    header_value,
    with_response_header,
)
from app.shared.context import bind_correlation_id, reset_correlation_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Bind and echo the correlation id header. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = header_value(scope, header_name)
        if raw:
            correlation_id = accept_request_id(raw)
        else:
            correlation_id = scope.get("state", {}).get("request_id") or str(uuid.uuid4())
        scope.setdefault("state", {})["correlation_id"] = correlation_id
        token = bind_correlation_id(correlation_id)
        try:
            await app(scope, receive, with_response_header(send, header_name, correlation_id))
        finally:
            reset_correlation_id(token)

    return asgi_app
