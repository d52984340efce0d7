"""
Loguru setup: JSON lines in deployed environments, readable lines locally.
"""

import json
import logging
import sys
from typing import Any, Dict

from loguru import logger

from inventory.core.config import settings

# stdlib loggers whose output is routed through loguru
ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy.engine.Engine")

_LEVELS = (
    (logging.CRITICAL, "critical"),
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, "info"),
)


class InterceptHandler(logging.Handler):
    """
    Forward stdlib log records to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        opt = logger.opt(depth=6, exception=record.exc_info)
        method = next((name for level, name in _LEVELS if record.levelno >= level), "debug")
        getattr(opt, method)(record.getMessage())


def serialize_record(record: Dict[str, Any]) -> str:
    """
    Render a loguru record as one JSON line.

    Bound extras such as ``request_id`` are copied to the top level; keys
    starting with an underscore are private and dropped.
    """
    time = record.get("time")
    base = {
        "timestamp": time.isoformat() if hasattr(time, "isoformat") else str(time),
        "service": settings.PROJECT_NAME,
        "environment": settings.ENVIRONMENT,
    }
    try:
        line = dict(base, level=record["level"].name, message=record["message"])
        for source, target in (("name", "module"), ("function", "function"), ("line", "line")):
            if source in record:
                line[target] = record[source]
        extra = record.get("extra")
        if isinstance(extra, dict):
            line.update({k: v for k, v in extra.items() if not k.startswith("_")})
        if record.get("exception"):
            line["exception"] = str(record["exception"])
        return json.dumps(line)
    except Exception as e:
        return json.dumps(
            dict(
                base,
                level="ERROR",
                message=f"Error serializing log: {e}",
                original_message=str(record.get("message", "")),
            )
        )


def _json_sink(message: Any) -> None:
    print(serialize_record(message.record), file=sys.stderr)


def configure_logging() -> None:
    """
    Replace loguru's default sink and take over stdlib logging.
    """
    logger.remove()

    if settings.JSON_LOGS:
        logger.add(_json_sink, level=settings.LOG_LEVEL, backtrace=True, diagnose=settings.DEBUG)
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} | {message} | {extra}",
            backtrace=True,
            diagnose=settings.DEBUG,
        )

    logging.getLogger().handlers = [InterceptHandler()]
    for name in ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers = [InterceptHandler()]
        routed.propagate = False

    logger.info(f"Logging configured (level={settings.LOG_LEVEL}, json={settings.JSON_LOGS})")
