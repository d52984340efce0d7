import os
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENABLE_METRICS", "true")
os.environ.setdefault("JSON_LOGS", "false")
os.environ.setdefault("MAX_PAGE_SIZE", "200")

from inventory.api.dependencies import get_category_repository, get_product_repository  # noqa: E402
from inventory.db.models import Category, Product  # noqa: E402
from inventory.main import app  # noqa: E402
from inventory.repositories.base import CategoryRepository, ProductRepository  # noqa: E402
from inventory.services.categories import CategoryService  # noqa: E402
from inventory.services.dashboard import DashboardService  # noqa: E402
from inventory.services.products import ProductService  # noqa: E402


class Catalog:
    """Entity table shared by the in-memory repositories. Rows are never removed."""

    def __init__(self) -> None:
        self.categories: Dict[str, Category] = {}
        self.products: Dict[str, Product] = {}


class InMemoryCategoryRepository(CategoryRepository):
    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _active(self) -> List[Category]:
        return [c for c in self.catalog.categories.values() if c.is_active]

    async def get_by_id(self, entity_id: str) -> Optional[Category]:
        category = self.catalog.categories.get(entity_id)
        return category if category is not None and category.is_active else None

    async def get_all(self) -> List[Category]:
        return sorted(self._active(), key=lambda c: c.name)

    async def add(self, entity: Category) -> Category:
        self.catalog.categories[entity.id] = entity
        return entity

    async def update(self, entity: Category) -> Category:
        entity.touch()
        self.catalog.categories[entity.id] = entity
        return entity

    async def delete(self, entity_id: str) -> bool:
        category = await self.get_by_id(entity_id)
        if category is None:
            return False
        category.deactivate()
        await self.update(category)
        return True

    async def exists(self, entity_id: str) -> bool:
        return await self.get_by_id(entity_id) is not None

    async def get_by_name(self, name: str) -> Optional[Category]:
        return next((c for c in self._active() if c.name.lower() == name.lower()), None)

    async def has_products(self, category_id: str) -> bool:
        return any(p.is_active and p.category_id == category_id for p in self.catalog.products.values())


class InMemoryProductRepository(ProductRepository):
    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _active(self) -> List[Product]:
        return [p for p in self.catalog.products.values() if p.is_active]

    async def get_by_id(self, entity_id: str) -> Optional[Product]:
        product = self.catalog.products.get(entity_id)
        return product if product is not None and product.is_active else None

    async def get_all(self) -> List[Product]:
        return self._active()

    async def add(self, entity: Product) -> Product:
        self.catalog.products[entity.id] = entity
        return entity

    async def update(self, entity: Product) -> Product:
        entity.touch()
        self.catalog.products[entity.id] = entity
        return entity

    async def delete(self, entity_id: str) -> bool:
        product = await self.get_by_id(entity_id)
        if product is None:
            return False
        product.deactivate()
        await self.update(product)
        return True

    async def exists(self, entity_id: str) -> bool:
        return await self.get_by_id(entity_id) is not None

    async def get_by_category(self, category_id: str) -> List[Product]:
        return [p for p in self._active() if p.category_id == category_id]

    async def search_by_name(self, term: str) -> List[Product]:
        return [p for p in self._active() if term.lower() in p.name.lower()]

    async def get_low_stock(self, threshold: int = 10) -> List[Product]:
        return [p for p in self._active() if p.stock_quantity < threshold]

    async def get_paged(self, page: int, page_size: int) -> List[Product]:
        start = max(page - 1, 0) * page_size
        return self._active()[start : start + page_size]

    async def get_total_count(self) -> int:
        return len(self._active())

    async def get_total_stock_value(self) -> Decimal:
        return sum((p.total_stock_value for p in self._active()), Decimal("0"))


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def category_repo(catalog: Catalog) -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(catalog)


@pytest.fixture
def product_repo(catalog: Catalog) -> InMemoryProductRepository:
    return InMemoryProductRepository(catalog)


@pytest.fixture
def category_service(category_repo: InMemoryCategoryRepository) -> CategoryService:
    return CategoryService(category_repo)


@pytest.fixture
def product_service(product_repo: InMemoryProductRepository, category_repo: InMemoryCategoryRepository) -> ProductService:
    return ProductService(product_repo, category_repo)


@pytest.fixture
def dashboard_service(
    product_repo: InMemoryProductRepository, category_repo: InMemoryCategoryRepository
) -> DashboardService:
    return DashboardService(product_repo, category_repo)


@pytest.fixture
def tools(catalog: Catalog) -> Category:
    category = Category.create("Tools", "Hand and power tools")
    catalog.categories[category.id] = category
    return category


@pytest.fixture
def make_product(catalog: Catalog, tools: Category):
    def factory(name: str = "Hammer", price: str = "10.00", stock: int = 20, category: Optional[Category] = None):
        product = Product.create(
            name=name,
            description=f"{name} description",
            price=Decimal(price),
            category_id=(category or tools).id,
            stock_quantity=stock,
        )
        catalog.products[product.id] = product
        return product

    return factory


@pytest_asyncio.fixture(scope="function")
async def client(
    category_repo: InMemoryCategoryRepository, product_repo: InMemoryProductRepository
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_category_repository] = lambda: category_repo
    app.dependency_overrides[get_product_repository] = lambda: product_repo
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
