"""Request ID middleware.

Forwards a well-formed client X-Request-ID or generates one, binds it to the
request context (so log lines carry it), and echoes it on the response.
Client values that fail the character/length check are replaced, which keeps
them out of log lines. Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

from app.shared.context import bind_request_id, reset_request_id

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def header_value(scope: dict, name: str) -> str | None:
    """First value of header `name` in an ASGI scope (case-insensitive)."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("latin-1").strip()
    return None


def with_response_header(send: Callable, name: str, value: str) -> Callable:
    """Wrap `send` so the response start message carries header name: value."""
    encoded = (name.encode(), value.encode())

    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            message["headers"] = [*message.get("headers", []), encoded]
        await send(message)

    return send_wrapper


def accept_request_id(raw: str | None) -> str:
    """Keep raw when it is a safe id; otherwise mint a UUID4."""
    if raw and _REQUEST_ID_PATTERN.match(raw):
        return raw
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id header on each HTTP exchange."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = accept_request_id(header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = bind_request_id(request_id)
        try:
            await app(scope, receive, with_response_header(send, header_name, request_id))
        finally:
            reset_request_id(token)

    return asgi_app
