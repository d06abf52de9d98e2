"""HTTP middleware: request ID and correlation ID.

Applied in main app; order matters (last added = outermost).
"""

from app.middleware.correlation_id import CorrelationIDMiddleware
from app.middleware.request_id import RequestIDMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
]
