"""
Pydantic schemas for the products resource.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from inventory.schemas.common import require_text, validate_http_url


class ProductBase(BaseModel):
    """
    Fields shared by product create and update payloads.
    """

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field(..., min_length=1, max_length=1000, description="Product description")
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Unit price")
    category_id: str = Field(..., min_length=1, description="ID of an active category")
    image_url: Optional[str] = Field(None, max_length=2048, description="Absolute http(s) image URL")

    @field_validator("name", "description", "category_id")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return require_text(v)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class ProductCreate(ProductBase):
    """
    Schema for creating a new product. The SKU is generated when omitted.
    """

    stock_quantity: int = Field(0, ge=0, description="Units in stock")
    sku: Optional[str] = Field(None, min_length=1, max_length=64, description="Stock keeping unit")


class ProductUpdate(ProductBase):
    """
    Schema for updating a product. Stock is changed through the stock endpoints.
    """

    pass


class StockUpdate(BaseModel):
    """Absolute stock level."""

    quantity: int = Field(..., ge=0, description="New stock level")


class StockAdjustment(BaseModel):
    """Number of units to add or remove."""

    quantity: int = Field(..., gt=0, description="Units to add or remove")


class ProductResponse(BaseModel):
    """
    Schema for product response, including derived stock figures.
    """

    id: str = Field(..., description="Product ID")
    name: str
    description: str
    price: Decimal
    category_id: str
    stock_quantity: int
    image_url: Optional[str] = None
    sku: Optional[str] = None
    is_low_stock: bool = Field(..., description="Stock below 10 units")
    is_out_of_stock: bool = Field(..., description="No stock left")
    total_stock_value: Decimal = Field(..., description="Price times stock")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "9b1d2c3e4f5a6b7c8d9e0f1a2b3c4d5e",
                    "name": "Cordless Drill",
                    "description": "18V drill with two batteries",
                    "price": 129.9,
                    "category_id": "3f2c0b6f8c0e4b1f9a7d2e5c4b3a2f10",
                    "stock_quantity": 4,
                    "image_url": None,
                    "sku": "SKU-20240101-1A2B3C4D",
                    "is_low_stock": True,
                    "is_out_of_stock": False,
                    "total_stock_value": 519.6,
                    "created_at": "2024-01-01T00:00:00Z",
                    "updated_at": None,
                }
            ]
        },
    }

    @field_serializer("price", "total_stock_value", when_used="json")
    def serialize_money(self, v: Decimal) -> float:
        return float(v)
