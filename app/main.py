"""FastAPI application entry point.

Wiring only: logging, telemetry, lifespan, exception handlers, middleware, routers.
No business logic here (SRP). See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.middleware import CorrelationIDMiddleware, RequestIDMiddleware
from app.shared.telemetry import TelemetryConfig, setup_logging


def _setup_telemetry(app: FastAPI, settings: Settings) -> None:
    """Configure tracing and instrument the app; the lifespan shuts it down."""
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    telemetry.instrument_fastapi(app)
    if settings.event_bus_backend == "redis":
        telemetry.instrument_redis()
    telemetry.instrument_logging()
    app.state.telemetry = telemetry


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.document_store = None
    app.state.message_bus = None
    app.state.telemetry = None

    register_exception_handlers(app)

    # Last added = outermost. Order: request ID -> correlation ID -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        CorrelationIDMiddleware,
        header_name=settings.correlation_id_header,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    if settings.telemetry_enabled:
        _setup_telemetry(app, settings)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
