"""Health check endpoints. Used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Not ready (store or bus missing)", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the document store and message bus were initialized; 503 otherwise.

    The Redis bus also has to hold a live connection.
    """
    state = request.app.state
    missing: list[str] = []
    if getattr(state, "document_store", None) is None:
        missing.append("document store")
    bus = getattr(state, "message_bus", None)
    is_available = getattr(bus, "is_available", None)
    if bus is None or (is_available is not None and not is_available()):
        missing.append("message bus")
    if not missing:
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            status="not_ready",
            message=f"Not configured: {', '.join(missing)}",
        ).model_dump(),
    )
