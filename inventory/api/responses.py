"""
Shared response documentation for route definitions.
"""

from typing import Any, Optional, TypeVar

from fastapi import HTTPException, status

from inventory.api.errors import ErrorResponse
from inventory.services.result import Result

T = TypeVar("T")

HTTP_201_CREATED = status.HTTP_201_CREATED
HTTP_204_NO_CONTENT = status.HTTP_204_NO_CONTENT
HTTP_400_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
HTTP_404_NOT_FOUND = status.HTTP_404_NOT_FOUND
HTTP_500_INTERNAL_SERVER_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR


class Tags:
    """API route tags for documentation grouping."""

    HEALTH = "Health"
    CATEGORIES = "Categories"
    PRODUCTS = "Products"
    DASHBOARD = "Dashboard"


read_error_responses: dict[int | str, dict[str, Any]] = {
    HTTP_404_NOT_FOUND: {
        "model": ErrorResponse,
        "description": "Not Found: No active entity with this ID",
    },
    HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponse,
        "description": "Internal Error: Unexpected server failure",
    },
}

write_error_responses: dict[int | str, dict[str, Any]] = {
    HTTP_400_BAD_REQUEST: {
        "model": ErrorResponse,
        "description": "Bad Request: Invalid input or broken business rule",
    },
    **read_error_responses,
}


def result_or_404(result: Result[T], detail: str) -> Optional[T]:
    """
    Return the value of a handler result.

    A not-found result becomes a 404 and a rejected one is re-raised for the
    domain error handler, which answers 400.
    """
    if result.is_not_found:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=detail)
    return result.unwrap()
