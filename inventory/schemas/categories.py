"""
Pydantic schemas for the categories resource.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from inventory.schemas.common import require_text


class CategoryBase(BaseModel):
    """
    Fields a client supplies for a category.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Category name, unique ignoring case")
    description: str = Field(..., min_length=1, max_length=500, description="Category description")

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return require_text(v)


class CategoryCreate(CategoryBase):
    """
    Schema for creating a new category.
    """

    pass


class CategoryUpdate(CategoryBase):
    """
    Schema for replacing a category's name and description.
    """

    pass


class CategoryResponse(BaseModel):
    """
    Schema for category response.
    """

    id: str = Field(..., description="Category ID")
    name: str
    description: str
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "3f2c0b6f8c0e4b1f9a7d2e5c4b3a2f10",
                    "name": "Tools",
                    "description": "Hand and power tools",
                    "created_at": "2024-01-01T00:00:00Z",
                    "updated_at": None,
                }
            ]
        },
    }
