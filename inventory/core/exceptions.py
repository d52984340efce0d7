"""
Domain exceptions.

Raised by entities and carried by handler results when a business rule is
violated. The API layer translates them into client errors.
"""

from typing import Optional


class InventoryError(Exception):
    """Base class for catalog rule violations."""

    code = "INVENTORY_ERROR"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class DuplicateNameError(InventoryError):
    """An active category already uses the requested name."""

    code = "DUPLICATE_NAME"


class HasDependentsError(InventoryError):
    """The category still has active products."""

    code = "HAS_DEPENDENTS"


class InvalidCategoryError(InventoryError):
    """The referenced category does not exist or is inactive."""

    code = "INVALID_CATEGORY"


class InvalidArgumentError(InventoryError):
    """A value breaks an entity invariant."""

    code = "INVALID_ARGUMENT"


class InsufficientStockError(InvalidArgumentError):
    """More units were requested than are in stock. Reported as ``INVALID_ARGUMENT``."""

    def __init__(self, available: int) -> None:
        super().__init__(f"Insufficient stock. Available: {available}", field="quantity")
        self.available = available
