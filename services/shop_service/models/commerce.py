"""Shop commerce models: orders and their line items."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer
from sqlalchemy import Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

DEFAULT_ORDER_STATUS = "Pending"


class Order(Base):
    """Orders. ``total_price`` is a snapshot taken when the order is placed."""

    __tablename__ = "shop_orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Shipping
    shipping_address1: Mapped[str] = mapped_column(String(255), nullable=False)
    shipping_address2: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    zip: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Free-form, e.g. "Pending", "Shipped", "Delivered"
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_ORDER_STATUS
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("shop_users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    date_ordered: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    __table_args__ = (
        Index("ix_shop_orders_date_ordered", "date_ordered"),
    )

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )
    user = relationship("User")

    def __repr__(self):
        return f"<Order {self.id} total={self.total_price}>"


class OrderItem(Base):
    """Order line items: one product reference and a quantity."""

    __tablename__ = "shop_order_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("shop_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("shop_products.id", ondelete="SET NULL"),
        nullable=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Index within the submitted item list
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="shop_order_items_positive_quantity"),
    )

    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    def __repr__(self):
        return f"<OrderItem product={self.product_id} qty={self.quantity}>"
