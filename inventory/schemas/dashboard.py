"""
Pydantic schemas for the inventory dashboard.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_serializer

from inventory.schemas.products import ProductResponse


class CategoryStats(BaseModel):
    """Product count for one active category."""

    category_id: str
    category_name: str
    product_count: int


class DashboardResponse(BaseModel):
    """
    Summary statistics derived from the active catalog.
    """

    total_products: int = Field(0, description="Number of active products")
    total_stock_value: Decimal = Field(Decimal("0"), description="Sum of price times stock")
    low_stock_products_count: int = Field(0, description="Number of low stock products")
    low_stock_products: List[ProductResponse] = Field(default_factory=list)
    category_stats: List[CategoryStats] = Field(default_factory=list)

    @field_serializer("total_stock_value", when_used="json")
    def serialize_money(self, v: Decimal) -> float:
        return float(v)
