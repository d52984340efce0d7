"""
Database model for categories.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from inventory.db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class Category(Base):
    """
    A named group of products.

    Categories are never removed; ``deactivate`` hides them from every read.
    """

    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    products = relationship("Product", back_populates="category")

    @classmethod
    def create(cls, name: str, description: str) -> "Category":
        return cls(
            id=new_id(),
            name=name,
            description=description,
            is_active=True,
            created_at=utcnow(),
        )

    def update(self, name: str, description: str) -> None:
        self.name = name
        self.description = description
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
        return f"<Category {self.id} {self.name!r}>"
