"""
Startup and shutdown hooks run by the application lifespan.
"""

from typing import Awaitable, Callable, List

from loguru import logger
from sqlalchemy import text

from inventory.db.session import engine


async def check_database() -> None:
    """Fail startup when PostgreSQL does not answer."""
    logger.info("Checking database connectivity")
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database is unreachable: {e}")
        raise
    logger.info("Database is reachable")


async def dispose_engine() -> None:
    """Release pooled connections."""
    await engine.dispose()
    logger.info("Database pool disposed")


startup_event_handlers: List[Callable[[], Awaitable[None]]] = [check_database]

shutdown_event_handlers: List[Callable[[], Awaitable[None]]] = [dispose_engine]
