"""
Prometheus instrumentation for HTTP traffic, repository queries and
catalog write events.
"""

import re
import time
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Gauge, Histogram, Summary, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

METRICS_PATH = "/metrics"

REQUEST_COUNT = Counter("http_requests_total", "HTTP requests served", ["method", "endpoint", "status_code"])

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, float("inf")),
)

REQUEST_IN_PROGRESS = Gauge("http_requests_in_progress", "HTTP requests being served", ["method", "endpoint"])

EXCEPTION_COUNT = Counter(
    "http_exceptions_total", "Requests that raised out of the application", ["method", "endpoint", "exception_type"]
)

DB_QUERY_TIME = Summary("db_query_duration_seconds", "Repository query latency", ["query_type", "table"])

INVENTORY_EVENTS = Counter("inventory_events_total", "Catalog writes by kind", ["event_type"])

_ENTITY_ID = re.compile(r"(?<=/)[0-9a-f]{32}(?=/|$)")


def normalize_path(path: str) -> str:
    """
    Replace entity ids in ``path`` with ``{id}`` so every product or
    category shares one label value.
    """
    return _ENTITY_ID.sub("{id}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Count and time every request except scrapes of the metrics endpoint.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        method = request.method
        endpoint = normalize_path(request.url.path)
        in_progress = REQUEST_IN_PROGRESS.labels(method=method, endpoint=endpoint)
        started = time.perf_counter()
        in_progress.inc()
        try:
            response = await call_next(request)
        except Exception as e:
            EXCEPTION_COUNT.labels(method=method, endpoint=endpoint, exception_type=type(e).__name__).inc()
            raise
        finally:
            in_progress.dec()

        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=response.status_code).inc()
        REQUEST_TIME.labels(method=method, endpoint=endpoint).observe(time.perf_counter() - started)
        return response


async def metrics_endpoint(request: Request) -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI) -> None:
    """
    Install the request middleware and expose ``/metrics``.
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route(METRICS_PATH, metrics_endpoint, include_in_schema=False)
    logger.info(f"Prometheus metrics exposed on {METRICS_PATH}")


def record_inventory_event(event_type: str) -> None:
    """Count a catalog write, e.g. ``product_created`` or ``stock_removed``."""
    INVENTORY_EVENTS.labels(event_type=event_type).inc()


def time_db_query(query_type: str, table: str) -> Callable[[F], F]:
    """Observe the duration of an async repository method, failures included."""

    def decorator(func: F) -> F:
        summary = DB_QUERY_TIME.labels(query_type=query_type, table=table)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                summary.observe(time.perf_counter() - started)

        return wrapper  # type: ignore[return-value]

    return decorator
