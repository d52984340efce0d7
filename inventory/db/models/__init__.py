"""
Database models.
"""

from inventory.db.models.category import Category
from inventory.db.models.product import LOW_STOCK_THRESHOLD, Product, generate_sku

__all__ = [
    "Category",
    "LOW_STOCK_THRESHOLD",
    "Product",
    "generate_sku",
]
