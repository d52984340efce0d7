"""
SQLAlchemy repository for products.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Select, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.metrics import time_db_query
from inventory.db.models import Product
from inventory.repositories.base import ProductRepository


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlProductRepository(ProductRepository):
    """Product persistence backed by an async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self) -> Select:
        return select(Product).where(Product.is_active.is_(True))

    @time_db_query("select", "products")
    async def get_by_id(self, entity_id: str) -> Optional[Product]:
        result = await self.db.execute(self._active().where(Product.id == entity_id))
        return result.scalar_one_or_none()

    @time_db_query("select", "products")
    async def get_all(self) -> List[Product]:
        result = await self.db.execute(self._active().order_by(Product.created_at, Product.id))
        return list(result.scalars().all())

    @time_db_query("insert", "products")
    async def add(self, entity: Product) -> Product:
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    @time_db_query("update", "products")
    async def update(self, entity: Product) -> Product:
        entity.touch()
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity_id: str) -> bool:
        product = await self.get_by_id(entity_id)
        if product is None:
            return False

        product.deactivate()
        await self.update(product)
        return True

    @time_db_query("select", "products")
    async def exists(self, entity_id: str) -> bool:
        query = select(exists().where(Product.id == entity_id, Product.is_active.is_(True)))
        result = await self.db.execute(query)
        return bool(result.scalar())

    @time_db_query("select", "products")
    async def get_by_category(self, category_id: str) -> List[Product]:
        query = self._active().where(Product.category_id == category_id).order_by(Product.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @time_db_query("select", "products")
    async def search_by_name(self, term: str) -> List[Product]:
        pattern = f"%{escape_like(term)}%"
        query = self._active().where(Product.name.ilike(pattern, escape="\\")).order_by(Product.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @time_db_query("select", "products")
    async def get_low_stock(self, threshold: int = 10) -> List[Product]:
        query = self._active().where(Product.stock_quantity < threshold).order_by(Product.stock_quantity)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @time_db_query("select", "products")
    async def get_paged(self, page: int, page_size: int) -> List[Product]:
        offset = max(page - 1, 0) * page_size
        query = self._active().order_by(Product.created_at, Product.id).offset(offset).limit(page_size)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @time_db_query("count", "products")
    async def get_total_count(self) -> int:
        query = select(func.count()).select_from(Product).where(Product.is_active.is_(True))
        result = await self.db.execute(query)
        return int(result.scalar() or 0)

    @time_db_query("sum", "products")
    async def get_total_stock_value(self) -> Decimal:
        query = select(func.coalesce(func.sum(Product.price * Product.stock_quantity), 0)).where(
            Product.is_active.is_(True)
        )
        result = await self.db.execute(query)
        return Decimal(result.scalar() or 0)
