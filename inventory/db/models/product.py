"""
Database model for products.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from inventory.core.exceptions import InsufficientStockError, InvalidArgumentError
from inventory.db.models.category import new_id, utcnow
from inventory.db.session import Base

# Fixed threshold behind the derived is_low_stock flag. The low stock query
# takes its own threshold.
LOW_STOCK_THRESHOLD = 10

Number = Union[Decimal, int, float, str]


def generate_sku(now: Optional[datetime] = None) -> str:
    """Build a SKU such as ``SKU-20240131-9F86D081``."""
    now = now or datetime.now(timezone.utc)
    return f"SKU-{now:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


def to_price(value: Number) -> Decimal:
    price = value if isinstance(value, Decimal) else Decimal(str(value))
    if price < 0:
        raise InvalidArgumentError("Price cannot be negative", field="price")
    return price


class Product(Base):
    """
    A sellable catalog entry.

    The product owns its price and stock. Every mutation validates before
    assigning anything, so a rejected call leaves the product untouched.
    """

    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False, index=True)
    description = Column(String(1000), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    image_url = Column(String(2048), nullable=True)
    sku = Column(String(64), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    category_id = Column(String(32), ForeignKey("categories.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category", back_populates="products")

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        price: Number,
        category_id: str,
        stock_quantity: int,
        image_url: Optional[str] = None,
        sku: Optional[str] = None,
    ) -> "Product":
        checked_price = to_price(price)
        if stock_quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative", field="stock_quantity")

        return cls(
            id=new_id(),
            name=name,
            description=description,
            price=checked_price,
            category_id=category_id,
            stock_quantity=stock_quantity,
            image_url=image_url,
            sku=sku or generate_sku(),
            is_active=True,
            created_at=utcnow(),
        )

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity < LOW_STOCK_THRESHOLD

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity <= 0

    @property
    def total_stock_value(self) -> Decimal:
        return Decimal(self.price) * self.stock_quantity

    def update(
        self,
        name: str,
        description: str,
        price: Number,
        category_id: str,
        image_url: Optional[str] = None,
    ) -> None:
        checked_price = to_price(price)

        self.name = name
        self.description = description
        self.price = checked_price
        self.category_id = category_id
        self.image_url = image_url
        self.touch()

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative", field="quantity")

        self.stock_quantity = quantity
        self.touch()

    def add_stock(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidArgumentError("Quantity must be positive", field="quantity")

        self.stock_quantity += amount
        self.touch()

    def remove_stock(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidArgumentError("Quantity must be positive", field="quantity")
        if amount > self.stock_quantity:
            raise InsufficientStockError(self.stock_quantity)

        self.stock_quantity -= amount
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def touch(self) -> None:
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.sku}>"
