from typing import List

from fastapi import APIRouter, Depends, Query, Response
from loguru import logger

from inventory.api.dependencies import get_product_service
from inventory.api.responses import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    read_error_responses,
    result_or_404,
    write_error_responses,
)
from inventory.core.config import settings
from inventory.schemas.common import PaginatedResponse
from inventory.schemas.products import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StockAdjustment,
    StockUpdate,
)
from inventory.services.products import ProductService

router = APIRouter()


def not_found(product_id: str) -> str:
    return f"Product with ID {product_id} not found"


@router.get("", response_model=List[ProductResponse])
async def get_products(service: ProductService = Depends(get_product_service)) -> List[ProductResponse]:
    """Get all active products."""
    logger.info("Getting all products")
    return await service.get_products()


@router.get("/paged", response_model=PaginatedResponse[ProductResponse])
async def get_products_paged(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, alias="pageSize"),
    service: ProductService = Depends(get_product_service),
) -> PaginatedResponse[ProductResponse]:
    """Get one page of active products."""
    logger.info(f"Getting products paged - Page: {page}, PageSize: {page_size}")
    return await service.get_products_paged(page, page_size)


@router.get("/search", response_model=List[ProductResponse])
async def search_products(
    term: str = Query(..., min_length=1), service: ProductService = Depends(get_product_service)
) -> List[ProductResponse]:
    """Search active products by name, ignoring case."""
    logger.info(f"Searching products with term: {term}")
    return await service.search_products(term)


@router.get("/category/{category_id}", response_model=List[ProductResponse])
async def get_products_by_category(
    category_id: str, service: ProductService = Depends(get_product_service)
) -> List[ProductResponse]:
    """Get active products in a category."""
    logger.info(f"Getting products by category: {category_id}")
    return await service.get_products_by_category(category_id)


@router.get("/low-stock", response_model=List[ProductResponse])
async def get_low_stock_products(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0),
    service: ProductService = Depends(get_product_service),
) -> List[ProductResponse]:
    """Get active products with fewer than ``threshold`` units."""
    logger.info(f"Getting low stock products with threshold: {threshold}")
    return await service.get_low_stock_products(threshold)


@router.get("/{product_id}", response_model=ProductResponse, responses=read_error_responses)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)) -> ProductResponse:
    """Get an active product by ID."""
    result = await service.get_product(product_id)
    return result_or_404(result, not_found(product_id))


@router.post("", response_model=ProductResponse, status_code=HTTP_201_CREATED, responses=write_error_responses)
async def create_product(data: ProductCreate, service: ProductService = Depends(get_product_service)) -> ProductResponse:
    """Create a product in an active category."""
    logger.info(f"Creating new product: {data.name}")
    result = await service.create_product(data)
    return result_or_404(result, "Product not found")


@router.put("/{product_id}", response_model=ProductResponse, responses=write_error_responses)
async def update_product(
    product_id: str, data: ProductUpdate, service: ProductService = Depends(get_product_service)
) -> ProductResponse:
    """Update a product's details, price and category."""
    logger.info(f"Updating product: {product_id}")
    result = await service.update_product(product_id, data)
    return result_or_404(result, not_found(product_id))


@router.patch("/{product_id}/stock", response_model=ProductResponse, responses=write_error_responses)
async def update_stock(
    product_id: str, data: StockUpdate, service: ProductService = Depends(get_product_service)
) -> ProductResponse:
    """Set a product's stock to an exact quantity."""
    logger.info(f"Updating stock for product: {product_id} to {data.quantity}")
    result = await service.update_stock(product_id, data.quantity)
    return result_or_404(result, not_found(product_id))


@router.post("/{product_id}/stock/add", response_model=ProductResponse, responses=write_error_responses)
async def add_stock(
    product_id: str, data: StockAdjustment, service: ProductService = Depends(get_product_service)
) -> ProductResponse:
    """Add units to a product's stock."""
    logger.info(f"Adding {data.quantity} units to product: {product_id}")
    result = await service.add_stock(product_id, data.quantity)
    return result_or_404(result, not_found(product_id))


@router.post("/{product_id}/stock/remove", response_model=ProductResponse, responses=write_error_responses)
async def remove_stock(
    product_id: str, data: StockAdjustment, service: ProductService = Depends(get_product_service)
) -> ProductResponse:
    """Remove units from a product's stock."""
    logger.info(f"Removing {data.quantity} units from product: {product_id}")
    result = await service.remove_stock(product_id, data.quantity)
    return result_or_404(result, not_found(product_id))


@router.delete("/{product_id}", status_code=HTTP_204_NO_CONTENT, responses=write_error_responses)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)) -> Response:
    """Deactivate a product."""
    logger.info(f"Deleting product: {product_id}")
    result = await service.delete_product(product_id)
    result_or_404(result, not_found(product_id))
    return Response(status_code=HTTP_204_NO_CONTENT)
