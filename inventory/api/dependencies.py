"""
FastAPI API dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.db.session import get_db as get_db_session
from inventory.repositories.base import CategoryRepository, ProductRepository
from inventory.repositories.category import SqlCategoryRepository
from inventory.repositories.product import SqlProductRepository
from inventory.services.categories import CategoryService
from inventory.services.dashboard import DashboardService
from inventory.services.products import ProductService


def get_category_repository(db: AsyncSession = Depends(get_db_session)) -> CategoryRepository:
    return SqlCategoryRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_db_session)) -> ProductRepository:
    return SqlProductRepository(db)


def get_category_service(
    categories: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(categories)


def get_product_service(
    products: ProductRepository = Depends(get_product_repository),
    categories: CategoryRepository = Depends(get_category_repository),
) -> ProductService:
    return ProductService(products, categories)


def get_dashboard_service(
    products: ProductRepository = Depends(get_product_repository),
    categories: CategoryRepository = Depends(get_category_repository),
) -> DashboardService:
    return DashboardService(products, categories)
