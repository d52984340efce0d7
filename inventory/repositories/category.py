"""
SQLAlchemy repository for categories.
"""

from typing import List, Optional

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.metrics import time_db_query
from inventory.db.models import Category, Product
from inventory.repositories.base import CategoryRepository


class SqlCategoryRepository(CategoryRepository):
    """Category persistence backed by an async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @time_db_query("select", "categories")
    async def get_by_id(self, entity_id: str) -> Optional[Category]:
        query = select(Category).where(Category.id == entity_id, Category.is_active.is_(True))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    @time_db_query("select", "categories")
    async def get_all(self) -> List[Category]:
        query = select(Category).where(Category.is_active.is_(True)).order_by(Category.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @time_db_query("insert", "categories")
    async def add(self, entity: Category) -> Category:
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    @time_db_query("update", "categories")
    async def update(self, entity: Category) -> Category:
        entity.touch()
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity_id: str) -> bool:
        category = await self.get_by_id(entity_id)
        if category is None:
            return False

        category.deactivate()
        await self.update(category)
        return True

    @time_db_query("select", "categories")
    async def exists(self, entity_id: str) -> bool:
        query = select(exists().where(Category.id == entity_id, Category.is_active.is_(True)))
        result = await self.db.execute(query)
        return bool(result.scalar())

    @time_db_query("select", "categories")
    async def get_by_name(self, name: str) -> Optional[Category]:
        query = select(Category).where(
            func.lower(Category.name) == name.lower(),
            Category.is_active.is_(True),
        )
        result = await self.db.execute(query)
        return result.scalars().first()

    @time_db_query("select", "products")
    async def has_products(self, category_id: str) -> bool:
        query = select(exists().where(Product.category_id == category_id, Product.is_active.is_(True)))
        result = await self.db.execute(query)
        return bool(result.scalar())
