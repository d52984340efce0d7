"""Business logic for categories."""

from typing import List

from loguru import logger

from inventory.core.exceptions import DuplicateNameError, HasDependentsError
from inventory.core.metrics import record_inventory_event
from inventory.db.models import Category
from inventory.repositories.base import CategoryRepository
from inventory.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from inventory.services.result import Result


class CategoryService:
    """Commands and queries for categories."""

    def __init__(self, categories: CategoryRepository):
        self.categories = categories

    async def get_categories(self) -> List[CategoryResponse]:
        """Get every active category."""
        categories = await self.categories.get_all()
        return [CategoryResponse.model_validate(category) for category in categories]

    async def get_category(self, category_id: str) -> Result[CategoryResponse]:
        """Get a specific active category by ID."""
        category = await self.categories.get_by_id(category_id)
        if category is None:
            return Result.not_found()

        return Result.found(CategoryResponse.model_validate(category))

    async def create_category(self, data: CategoryCreate) -> Result[CategoryResponse]:
        """Create a new category with a name no active category uses."""
        if await self.categories.get_by_name(data.name) is not None:
            logger.warning(f"Category name '{data.name}' already in use")
            return Result.invalid(DuplicateNameError(f"Category with name '{data.name}' already exists", field="name"))

        category = await self.categories.add(Category.create(data.name, data.description))

        logger.info(f"Created category {category.id} '{category.name}'")
        record_inventory_event("category_created")
        return Result.found(CategoryResponse.model_validate(category))

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Result[CategoryResponse]:
        """Rename or re-describe a category."""
        category = await self.categories.get_by_id(category_id)
        if category is None:
            return Result.not_found()

        existing = await self.categories.get_by_name(data.name)
        if existing is not None and existing.id != category_id:
            logger.warning(f"Category name '{data.name}' already used by {existing.id}")
            return Result.invalid(DuplicateNameError(f"Category with name '{data.name}' already exists", field="name"))

        category.update(data.name, data.description)
        category = await self.categories.update(category)

        logger.info(f"Updated category {category.id}")
        record_inventory_event("category_updated")
        return Result.found(CategoryResponse.model_validate(category))

    async def delete_category(self, category_id: str) -> Result[bool]:
        """Deactivate a category that no active product references."""
        if not await self.categories.exists(category_id):
            return Result.not_found()

        if await self.categories.has_products(category_id):
            logger.warning(f"Category {category_id} still has active products")
            return Result.invalid(HasDependentsError("Cannot delete category with associated products"))

        if not await self.categories.delete(category_id):
            return Result.not_found()

        logger.info(f"Deactivated category {category_id}")
        record_inventory_event("category_deleted")
        return Result.found(True)
