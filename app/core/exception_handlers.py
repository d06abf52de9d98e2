"""Centralized exception handlers for the FastAPI app.

Every failure leaves the service as {"error", "message", "details"}.
Domain exceptions carry their own error_code; the table below decides the
HTTP status. Server-side failures (5xx) are logged with the request id so
they can be matched to a client report.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import TaskCoordinatorException
from app.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_TASK_STATUS": 400,
    "RESOURCE_NOT_FOUND": 404,
    "TASK_ALREADY_EXISTS": 409,
    "USER_ALREADY_EXISTS": 409,
    "DOCUMENT_ALREADY_EXISTS": 409,
    "SCOPE_RESOLUTION_ERROR": 500,
    "STORE_UNAVAILABLE": 500,
    "EVENT_PUBLISH_FAILED": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: TaskCoordinatorException) -> int:
    """HTTP status for a domain exception; unmapped codes are client errors."""
    return ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error_body(error: str, message: str, details=None) -> dict:
    return {"error": error, "message": message, "details": details or {}}


def _coordinator_exception_handler(
    request: Request, exc: TaskCoordinatorException
) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "%s %s -> %d %s: %s (request_id=%s trace_id=%s)",
            request.method,
            request.url.path,
            status,
            exc.error_code,
            exc.message,
            getattr(request.state, "request_id", None),
            get_trace_id(),
        )
    else:
        logger.info(
            "%s %s -> %d %s", request.method, request.url.path, status, exc.error_code
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are 422 with pydantic's error list."""
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR", "Request validation failed", {"errors": exc.errors()}
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing-level errors (404 unknown path, 405 wrong method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected is a 500; the cause is shown only in debug mode."""
    logger.exception(
        "Unhandled exception on %s %s (request_id=%s trace_id=%s)",
        request.method,
        request.url.path,
        getattr(request.state, "request_id", None),
        get_trace_id(),
    )
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500, content=_error_body("INTERNAL_ERROR", message)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app (call once)."""
    app.add_exception_handler(TaskCoordinatorException, _coordinator_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
