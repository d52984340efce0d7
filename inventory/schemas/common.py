"""
Schemas shared across resources.
"""

from typing import Generic, List, Optional, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel, Field

T = TypeVar("T")


def require_text(value: str) -> str:
    """Strip surrounding whitespace and reject blank strings."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


def validate_http_url(value: Optional[str]) -> Optional[str]:
    """Accept only absolute http/https URLs. Empty strings count as absent."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http or https URL")
    return value


class PaginatedResponse(BaseModel, Generic[T]):
    """
    A page of results plus the counts needed to navigate.
    """

    items: List[T] = Field(default_factory=list, description="Items on this page")
    page: int = Field(..., description="1-indexed page number")
    page_size: int = Field(..., description="Requested page size")
    total_count: int = Field(..., description="Number of active items across all pages")
    total_pages: int = Field(..., description="ceil(total_count / page_size)")
    has_previous: bool = Field(..., description="Whether a previous page exists")
    has_next: bool = Field(..., description="Whether a next page exists")
