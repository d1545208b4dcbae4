"""Order operations: placing an order with a priced snapshot, cascading deletes, sales totals.

Item rows, the price look-up and the order row share one transaction, so a
failure at any step leaves no orphaned line items behind.
"""

import uuid
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException, status
from libs.common.logging import get_logger
from services.shop_service.models import (
    DEFAULT_ORDER_STATUS,
    Order,
    OrderItem,
    Product,
    User,
)
from services.shop_service.schemas import OrderCreate
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def order_details_query() -> Select:
    """Orders with user, items, item products and product categories loaded."""
    return select(Order).options(
        selectinload(Order.user),
        selectinload(Order.items)
        .selectinload(OrderItem.product)
        .selectinload(Product.category),
    )


async def get_order_with_details(
    db: AsyncSession, order_id: uuid.UUID
) -> Optional[Order]:
    result = await db.execute(
        order_details_query()
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _ensure_products_exist(db: AsyncSession, product_ids: set[uuid.UUID]) -> None:
    result = await db.execute(select(Product.id).where(Product.id.in_(product_ids)))
    missing = product_ids - set(result.scalars().all())
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid product: {sorted(str(pid) for pid in missing)[0]}",
        )


async def compute_items_total(db: AsyncSession, item_ids: list[uuid.UUID]) -> Decimal:
    """Sum ``quantity * price`` for the given order items at current product prices."""
    if not item_ids:
        return Decimal("0")

    result = await db.execute(
        select(OrderItem.id, OrderItem.quantity, Product.price)
        .join(Product, OrderItem.product_id == Product.id)
        .where(OrderItem.id.in_(item_ids))
    )
    rows = result.all()
    if len(rows) != len(item_ids):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order item references a product that no longer exists",
        )

    line_totals = [Decimal(str(price)) * quantity for _, quantity, price in rows]
    return sum(line_totals, Decimal("0")).quantize(CENTS)


async def create_order(db: AsyncSession, order_in: OrderCreate) -> Order:
    """Place an order.

    1. validate every product and the user reference (nothing is written on failure)
    2. write all line items as one batch
    3. price each line item against its product and sum the totals
    4. write the order with the computed total

    Steps 2-4 commit together or not at all.
    """
    await _ensure_products_exist(
        db, {item.product_id for item in order_in.order_items}
    )
    if order_in.user_id is not None and not await db.get(User, order_in.user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user"
        )

    order = Order(
        shipping_address1=order_in.shipping_address1,
        shipping_address2=order_in.shipping_address2,
        city=order_in.city,
        zip=order_in.zip,
        country=order_in.country,
        phone=order_in.phone,
        status=order_in.status or DEFAULT_ORDER_STATUS,
        user_id=order_in.user_id,
        total_price=Decimal("0"),
    )
    order.items = [
        OrderItem(product_id=item.product_id, quantity=item.quantity, position=index)
        for index, item in enumerate(order_in.order_items)
    ]
    db.add(order)

    try:
        await db.flush()
        order.total_price = await compute_items_total(
            db, [item.id for item in order.items]
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Created order %s with %d items (total=%s)",
        order.id,
        len(order_in.order_items),
        order.total_price,
    )
    return await get_order_with_details(db, order.id)


async def delete_order(db: AsyncSession, order_id: uuid.UUID) -> None:
    """Delete an order and all of its line items.

    Raises 404 without touching anything when the order does not exist.
    """
    result = await db.execute(
        select(Order).where(Order.id == order_id).options(selectinload(Order.items))
    )
    order = result.scalar_one_or_none()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    item_count = len(order.items)
    await db.delete(order)
    await db.commit()

    logger.info("Deleted order %s and %d items", order_id, item_count)


async def total_sales(db: AsyncSession) -> Decimal:
    """Sum of ``total_price`` across every order; zero when there are none."""
    result = await db.execute(select(func.coalesce(func.sum(Order.total_price), 0)))
    return Decimal(str(result.scalar_one())).quantize(CENTS)
