"""
Repository contracts consumed by the command and query handlers.

Every read returns active entities only. ``update`` stamps the entity's
``updated_at`` and ``delete`` is a soft delete.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from inventory.db.models import Category, Product

ModelT = TypeVar("ModelT")


class Repository(ABC, Generic[ModelT]):
    """Operations shared by every entity repository."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[ModelT]:
        """Return the active entity with this id, or None."""

    @abstractmethod
    async def get_all(self) -> List[ModelT]:
        """Return every active entity."""

    @abstractmethod
    async def add(self, entity: ModelT) -> ModelT:
        """Persist a new entity."""

    @abstractmethod
    async def update(self, entity: ModelT) -> ModelT:
        """Persist changes to an existing entity."""

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Deactivate the entity. Returns False when the id does not resolve."""

    @abstractmethod
    async def exists(self, entity_id: str) -> bool:
        """Return True when an active entity has this id."""


class CategoryRepository(Repository[Category]):
    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        """Case-insensitive lookup among active categories."""

    @abstractmethod
    async def has_products(self, category_id: str) -> bool:
        """Return True when an active product references the category."""


class ProductRepository(Repository[Product]):
    @abstractmethod
    async def get_by_category(self, category_id: str) -> List[Product]:
        ...

    @abstractmethod
    async def search_by_name(self, term: str) -> List[Product]:
        """Case-insensitive substring match on the product name."""

    @abstractmethod
    async def get_low_stock(self, threshold: int = 10) -> List[Product]:
        """Return products whose stock is strictly below ``threshold``."""

    @abstractmethod
    async def get_paged(self, page: int, page_size: int) -> List[Product]:
        """Return the 1-indexed page; pages past the end are empty."""

    @abstractmethod
    async def get_total_count(self) -> int:
        ...

    @abstractmethod
    async def get_total_stock_value(self) -> Decimal:
        """Sum of price times stock over active products."""
