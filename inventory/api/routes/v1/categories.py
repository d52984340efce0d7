from typing import List

from fastapi import APIRouter, Depends, Response
from loguru import logger

from inventory.api.dependencies import get_category_service
from inventory.api.responses import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    read_error_responses,
    result_or_404,
    write_error_responses,
)
from inventory.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from inventory.services.categories import CategoryService

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def get_categories(service: CategoryService = Depends(get_category_service)) -> List[CategoryResponse]:
    """Get all active categories."""
    logger.info("Getting all categories")
    return await service.get_categories()


@router.get("/{category_id}", response_model=CategoryResponse, responses=read_error_responses)
async def get_category(category_id: str, service: CategoryService = Depends(get_category_service)) -> CategoryResponse:
    """Get an active category by ID."""
    result = await service.get_category(category_id)
    return result_or_404(result, f"Category with ID {category_id} not found")


@router.post("", response_model=CategoryResponse, status_code=HTTP_201_CREATED, responses=write_error_responses)
async def create_category(
    data: CategoryCreate, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    """Create a category. Names are unique ignoring case."""
    logger.info(f"Creating new category: {data.name}")
    result = await service.create_category(data)
    return result_or_404(result, "Category not found")


@router.put("/{category_id}", response_model=CategoryResponse, responses=write_error_responses)
async def update_category(
    category_id: str, data: CategoryUpdate, service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    """Update a category's name and description."""
    logger.info(f"Updating category: {category_id}")
    result = await service.update_category(category_id, data)
    return result_or_404(result, f"Category with ID {category_id} not found")


@router.delete("/{category_id}", status_code=HTTP_204_NO_CONTENT, responses=write_error_responses)
async def delete_category(category_id: str, service: CategoryService = Depends(get_category_service)) -> Response:
    """Deactivate a category that has no active products."""
    logger.info(f"Deleting category: {category_id}")
    result = await service.delete_category(category_id)
    result_or_404(result, f"Category with ID {category_id} not found")
    return Response(status_code=HTTP_204_NO_CONTENT)
