"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestContext,
    get_correlation_id,
    get_request_context,
    get_request_id,
)
from app.shared.utils import utc_now

__all__ = [
    "RequestContext",
    "get_correlation_id",
    "get_request_context",
    "get_request_id",
    "utc_now",
]
