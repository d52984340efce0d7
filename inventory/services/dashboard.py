"""Inventory dashboard aggregation."""

from collections import Counter
from decimal import Decimal
from typing import Iterable, List, Optional

from inventory.db.models import Category, Product
from inventory.repositories.base import CategoryRepository, ProductRepository
from inventory.schemas.dashboard import CategoryStats, DashboardResponse
from inventory.schemas.products import ProductResponse


def summarize(
    products: Iterable[Product],
    categories: Iterable[Category],
    total_stock_value: Optional[Decimal] = None,
) -> DashboardResponse:
    """
    Build dashboard figures from active products and categories.

    ``total_stock_value`` is the store-side aggregate when the caller has one;
    otherwise it is summed over ``products``.

    Every active category appears in ``category_stats``, including those with
    no products. Nothing passed in is modified.
    """
    products = list(products)
    low_stock = [product for product in products if product.is_low_stock]
    counts = Counter(product.category_id for product in products)

    return DashboardResponse(
        total_products=len(products),
        total_stock_value=(
            total_stock_value
            if total_stock_value is not None
            else sum((product.total_stock_value for product in products), Decimal("0"))
        ),
        low_stock_products_count=len(low_stock),
        low_stock_products=[ProductResponse.model_validate(product) for product in low_stock],
        category_stats=[
            CategoryStats(
                category_id=category.id,
                category_name=category.name,
                product_count=counts.get(category.id, 0),
            )
            for category in categories
        ],
    )


class DashboardService:
    """Read-only summary of the catalog."""

    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    async def get_dashboard(self) -> DashboardResponse:
        products: List[Product] = await self.products.get_all()
        categories: List[Category] = await self.categories.get_all()
        total_stock_value = await self.products.get_total_stock_value()
        return summarize(products, categories, total_stock_value)
