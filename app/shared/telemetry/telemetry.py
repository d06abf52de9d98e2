"""OpenTelemetry tracing setup for the coordinator.

One TelemetryConfig per app, built from Settings in create_app() and shut
down by the lifespan. Exporters: "console" (development), "otlp" (gRPC
collector) or "none" (spans are created but dropped).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

# Probes are polled constantly and carry no task context.
_UNTRACED_URLS = "/api/v1/health"


def _exporter_for(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for kind, or None for "none"."""
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("OTLP exporter selected without an endpoint; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations installed on it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create and register the global tracer provider.

        Sampling follows the parent span when there is one, otherwise
        sample_rate. A failure here is logged and leaves tracing off; the
        service keeps running untraced.
        """
        if not self.enabled:
            return None
        resource = Resource.create({
            SERVICE_NAME: self.service_name,
            SERVICE_VERSION: self.service_version,
            "deployment.environment": self.environment,
        })
        try:
            provider = TracerProvider(
                resource=resource,
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            exporter = _exporter_for(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Tracing setup failed; continuing without traces")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    @property
    def active(self) -> bool:
        return self.enabled and self.tracer_provider is not None

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Server spans for every request except health probes."""
        if self.active:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=self.tracer_provider,
                excluded_urls=_UNTRACED_URLS,
            )

    def instrument_redis(self) -> None:
        """Client spans for bus PUBLISH commands."""
        if self.active:
            RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)

    def instrument_logging(self) -> None:
        """Add otelTraceID / otelSpanID to log records."""
        if self.active:
            LoggingInstrumentor().instrument(tracer_provider=self.tracer_provider)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error while flushing spans at shutdown")
        self.tracer_provider = None
