"""Shop catalog models: categories and products."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy import Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship


class Category(Base):
    """Product categories (e.g., 'Electronics', 'Shoes')."""

    __tablename__ = "shop_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Products keep existing when their category is removed; the database
    # nulls the reference (ON DELETE SET NULL).
    products = relationship(
        "Product", back_populates="category", passive_deletes=True
    )

    def __repr__(self):
        return f"<Category {self.name}>"


class Product(Base):
    """Products available in the shop."""

    __tablename__ = "shop_products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("shop_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Basic info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rich_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    brand: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    count_in_stock: Mapped[int] = mapped_column(Integer, nullable=False)

    # Review aggregates
    rating: Mapped[Decimal] = mapped_column(
        Numeric(3, 1), nullable=False, default=Decimal("0")
    )
    num_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint(
            "count_in_stock >= 0 AND count_in_stock <= 255",
            name="shop_products_stock_range",
        ),
    )

    category = relationship("Category", back_populates="products")

    def __repr__(self):
        return f"<Product {self.name}>"
