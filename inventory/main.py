"""
ASGI entry point: ``uvicorn inventory.main:app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from inventory.api.errors import register_exception_handlers
from inventory.api.middleware import RequestIDMiddleware
from inventory.api.responses import Tags
from inventory.api.routes.v1 import categories, dashboard, health, products
from inventory.core.config import settings
from inventory.core.events import shutdown_event_handlers, startup_event_handlers
from inventory.core.logging import configure_logging
from inventory.core.metrics import setup_metrics
from inventory.core.tracing import setup_tracing

OPENAPI_TAGS = [
    {"name": Tags.HEALTH, "description": "Liveness and readiness probes"},
    {"name": Tags.CATEGORIES, "description": "Create, rename and retire categories"},
    {"name": Tags.PRODUCTS, "description": "Product catalog and stock movements"},
    {"name": Tags.DASHBOARD, "description": "Inventory totals and low-stock report"},
]


def init_sentry() -> None:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        release=f"{settings.PROJECT_NAME}@{settings.VERSION}",
    )
    logger.info("Sentry initialized")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.SENTRY_DSN:
        init_sentry()

    for handler in startup_event_handlers:
        await handler()
    yield
    for handler in shutdown_event_handlers:
        await handler()


def cors_origins() -> List[str]:
    if settings.CORS_ORIGINS_STR == "*":
        return ["*"]
    return [origin.strip() for origin in settings.CORS_ORIGINS_STR.split(",") if origin.strip()]


def create_application() -> FastAPI:
    """
    Build the app: logging, error handlers, middleware, then routers under
    ``API_PREFIX``. Interactive docs are hidden in production.
    """
    configure_logging()

    public_docs = settings.ENVIRONMENT != "production"
    prefix = settings.API_PREFIX
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url=f"{prefix}/docs" if public_docs else None,
        redoc_url=f"{prefix}/redoc" if public_docs else None,
        openapi_url=f"{prefix}/openapi.json" if public_docs else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    register_exception_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestIDMiddleware)

    if settings.ENABLE_METRICS:
        setup_metrics(application)
    if settings.ENABLE_TRACING:
        setup_tracing(application)

    application.include_router(health.router, prefix=f"{prefix}/health", tags=[Tags.HEALTH])
    application.include_router(categories.router, prefix=f"{prefix}/categories", tags=[Tags.CATEGORIES])
    application.include_router(products.router, prefix=f"{prefix}/products", tags=[Tags.PRODUCTS])
    application.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=[Tags.DASHBOARD])

    return application


app = create_application()
