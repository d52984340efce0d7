"""
Exception handlers that turn failures into ``{"detail", "code"}`` bodies.

Catalog rule violations (duplicate names, unknown categories, bad prices or
quantities) are 400s. Database faults that escape the handlers are 409 or
500 and never leak driver messages to the client.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inventory.core.exceptions import InventoryError


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    detail: str
    code: Optional[str] = None


def create_error_response(error_code: str, detail: str) -> Dict[str, str]:
    return {"detail": detail, "code": error_code}


def error_json(status_code: int, error_code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=create_error_response(error_code, detail))


def describe_validation_error(err: Dict[str, Any]) -> str:
    """``body.price: Input should be greater than or equal to 0``"""
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err.get('msg', 'Invalid value')}"


async def handle_inventory_error(request: Request, exc: InventoryError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.code} {exc.message}")
    return error_json(status.HTTP_400_BAD_REQUEST, exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [describe_validation_error(err) for err in exc.errors()]
    logger.warning(f"Invalid request to {request.url.path}: {messages}")
    return error_json(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", " | ".join(messages))


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error(f"Constraint violated on {request.url.path}: {exc.orig}")
    return error_json(status.HTTP_409_CONFLICT, "DATABASE_INTEGRITY_ERROR", "Database constraint violated")


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.url.path}: {exc}")
    return error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR", "Database error")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")
    return error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, "UNEXPECTED_ERROR", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(InventoryError, handle_inventory_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
