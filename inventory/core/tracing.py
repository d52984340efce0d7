"""
OpenTelemetry tracing, switched on with ``ENABLE_TRACING``.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI
from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio
from opentelemetry.trace import Span

from inventory.core.config import settings
from inventory.db.session import engine

TRACER_NAME = "inventory"


def span_exporters() -> Iterator[SpanExporter]:
    if settings.ENVIRONMENT == "development":
        yield ConsoleSpanExporter()
    if settings.OTLP_ENDPOINT:
        yield OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT)


def build_tracer_provider() -> TracerProvider:
    """
    Create the global provider, tagged with the service name and version.
    """
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.PROJECT_NAME,
                "service.version": settings.VERSION,
                "deployment.environment": settings.ENVIRONMENT,
            }
        ),
        sampler=ParentBasedTraceIdRatio(settings.TRACING_SAMPLE_RATE),
    )
    for exporter in span_exporters():
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return provider


def setup_tracing(app: FastAPI) -> None:
    """
    Trace incoming requests and the SQL they issue.

    A broken exporter is logged and the service keeps running untraced.
    """
    if not settings.ENABLE_TRACING:
        return

    try:
        provider = build_tracer_provider()
        FastAPIInstrumentor.instrument_app(app, tracer_provider=provider, excluded_urls="api/health,metrics")
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine, tracer_provider=provider)
    except Exception as e:
        logger.error(f"Tracing disabled, setup failed: {e}")
        return

    logger.info("OpenTelemetry tracing configured")


@contextmanager
def create_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Span]:
    """
    Run a block inside an internal span, e.g. ``product.stock_change``.

    Without a configured provider the span records nothing.
    """
    with trace.get_tracer(TRACER_NAME).start_as_current_span(name, attributes=attributes) as span:
        yield span
