"""Business logic for products."""

import math
from typing import Callable, List

from loguru import logger

from inventory.core.config import settings
from inventory.core.exceptions import InvalidArgumentError, InvalidCategoryError
from inventory.core.metrics import record_inventory_event
from inventory.core.tracing import create_span
from inventory.db.models import Product
from inventory.repositories.base import CategoryRepository, ProductRepository
from inventory.schemas.common import PaginatedResponse
from inventory.schemas.products import ProductCreate, ProductResponse, ProductUpdate
from inventory.services.result import Result


def to_responses(products: List[Product]) -> List[ProductResponse]:
    return [ProductResponse.model_validate(product) for product in products]


class ProductService:
    """Commands and queries for products."""

    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    # Queries

    async def get_products(self) -> List[ProductResponse]:
        """Get every active product."""
        return to_responses(await self.products.get_all())

    async def get_product(self, product_id: str) -> Result[ProductResponse]:
        """Get a specific active product by ID."""
        product = await self.products.get_by_id(product_id)
        if product is None:
            return Result.not_found()

        return Result.found(ProductResponse.model_validate(product))

    async def get_products_by_category(self, category_id: str) -> List[ProductResponse]:
        return to_responses(await self.products.get_by_category(category_id))

    async def search_products(self, term: str) -> List[ProductResponse]:
        """Case-insensitive substring search on product names."""
        return to_responses(await self.products.search_by_name(term))

    async def get_low_stock_products(self, threshold: int = settings.LOW_STOCK_THRESHOLD) -> List[ProductResponse]:
        """Get products whose stock is below ``threshold``."""
        return to_responses(await self.products.get_low_stock(threshold))

    async def get_products_paged(self, page: int, page_size: int) -> PaginatedResponse[ProductResponse]:
        """
        Get one page of active products.

        ``page`` and ``page_size`` are expected to be positive; the API layer
        validates them. A page past the last one comes back empty.
        """
        products = await self.products.get_paged(page, page_size)
        total_count = await self.products.get_total_count()
        total_pages = math.ceil(total_count / page_size)

        return PaginatedResponse[ProductResponse](
            items=to_responses(products),
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_previous=page > 1,
            has_next=page < total_pages,
        )

    # Commands

    async def create_product(self, data: ProductCreate) -> Result[ProductResponse]:
        """Create a product in an active category."""
        if not await self.categories.exists(data.category_id):
            logger.warning(f"Category {data.category_id} not found for new product")
            return Result.invalid(
                InvalidCategoryError(f"Category with ID {data.category_id} not found", field="category_id")
            )

        try:
            product = Product.create(
                name=data.name,
                description=data.description,
                price=data.price,
                category_id=data.category_id,
                stock_quantity=data.stock_quantity,
                image_url=data.image_url,
                sku=data.sku,
            )
        except InvalidArgumentError as e:
            logger.warning(f"Rejected new product: {e.message}")
            return Result.invalid(e)

        product = await self.products.add(product)

        logger.info(f"Created product {product.id} ({product.sku})")
        record_inventory_event("product_created")
        return Result.found(ProductResponse.model_validate(product))

    async def update_product(self, product_id: str, data: ProductUpdate) -> Result[ProductResponse]:
        """Update a product's descriptive fields, price and category."""
        product = await self.products.get_by_id(product_id)
        if product is None:
            return Result.not_found()

        if not await self.categories.exists(data.category_id):
            logger.warning(f"Category {data.category_id} not found for product {product_id}")
            return Result.invalid(
                InvalidCategoryError(f"Category with ID {data.category_id} not found", field="category_id")
            )

        try:
            product.update(
                name=data.name,
                description=data.description,
                price=data.price,
                category_id=data.category_id,
                image_url=data.image_url,
            )
        except InvalidArgumentError as e:
            logger.warning(f"Rejected update of product {product_id}: {e.message}")
            return Result.invalid(e)

        product = await self.products.update(product)

        logger.info(f"Updated product {product.id}")
        record_inventory_event("product_updated")
        return Result.found(ProductResponse.model_validate(product))

    async def update_stock(self, product_id: str, quantity: int) -> Result[ProductResponse]:
        """Set the stock to exactly ``quantity``."""
        return await self._change_stock(product_id, lambda product: product.set_stock(quantity), "stock_set")

    async def add_stock(self, product_id: str, amount: int) -> Result[ProductResponse]:
        """Receive ``amount`` units into stock."""
        return await self._change_stock(product_id, lambda product: product.add_stock(amount), "stock_added")

    async def remove_stock(self, product_id: str, amount: int) -> Result[ProductResponse]:
        """Take ``amount`` units out of stock."""
        return await self._change_stock(product_id, lambda product: product.remove_stock(amount), "stock_removed")

    async def delete_product(self, product_id: str) -> Result[bool]:
        """Deactivate a product."""
        if not await self.products.delete(product_id):
            return Result.not_found()

        logger.info(f"Deactivated product {product_id}")
        record_inventory_event("product_deleted")
        return Result.found(True)

    async def _change_stock(
        self, product_id: str, change: Callable[[Product], None], event_type: str
    ) -> Result[ProductResponse]:
        product = await self.products.get_by_id(product_id)
        if product is None:
            return Result.not_found()

        with create_span("product.stock_change", {"product.id": product_id, "event.type": event_type}) as span:
            try:
                change(product)
            except InvalidArgumentError as e:
                logger.warning(f"Rejected stock change on product {product_id}: {e.message}")
                span.set_attribute("stock.rejected", e.code)
                return Result.invalid(e)

            product = await self.products.update(product)
            span.set_attribute("product.stock_quantity", product.stock_quantity)

        logger.info(f"Stock of product {product.id} is now {product.stock_quantity}")
        record_inventory_event(event_type)
        return Result.found(ProductResponse.model_validate(product))
