"""Unit tests for order_ops core business logic.

Tests call order_ops functions directly with the db_session fixture.
No HTTP layer involved.
"""

import uuid
from decimal import Decimal

import pytest
from fastapi import HTTPException
from services.shop_service.models import DEFAULT_ORDER_STATUS, Order, OrderItem, Product
from services.shop_service.schemas import OrderCreate
from services.shop_service.services import order_ops
from services.shop_service.services.order_ops import (
    compute_items_total,
    create_order,
    delete_order,
    total_sales,
)
from sqlalchemy import func, select
from tests.factories import OrderFactory, ProductFactory, UserFactory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _make_product(db, price):
    product = ProductFactory.create(price=Decimal(price))
    db.add(product)
    await db.commit()
    return product


def _order_in(items, user_id=None, **overrides):
    data = {
        "order_items": [
            {"product_id": product_id, "quantity": quantity}
            for product_id, quantity in items
        ],
        "shipping_address1": "12 Marina Road",
        "city": "Lagos",
        "zip": "100001",
        "country": "Nigeria",
        "phone": "+2348000000000",
        "user_id": user_id,
    }
    data.update(overrides)
    return OrderCreate(**data)


async def _count(db, model):
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ---------------------------------------------------------------------------
# create_order
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_totals_line_items(db_session):
    """2 x 10.00 + 1 x 5.00 = 25.00."""
    ten = await _make_product(db_session, "10.00")
    five = await _make_product(db_session, "5.00")

    order = await create_order(db_session, _order_in([(ten.id, 2), (five.id, 1)]))

    assert order.total_price == Decimal("25.00")
    assert order.status == DEFAULT_ORDER_STATUS
    assert [item.quantity for item in order.items] == [2, 1]
    assert [item.product_id for item in order.items] == [ten.id, five.id]
    assert order.items[0].product.price == Decimal("10.00")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_keeps_explicit_status_and_user(db_session):
    user = UserFactory.create()
    db_session.add(user)
    await db_session.commit()
    product = await _make_product(db_session, "3.50")

    order = await create_order(
        db_session,
        _order_in([(product.id, 3)], user_id=user.id, status="Shipped"),
    )

    assert order.status == "Shipped"
    assert order.user_id == user.id
    assert order.user.name == user.name
    assert order.total_price == Decimal("10.50")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_order_total_is_a_snapshot(db_session):
    """Later price changes do not touch an existing order's total."""
    product = await _make_product(db_session, "10.00")
    order = await create_order(db_session, _order_in([(product.id, 2)]))

    product.price = Decimal("99.00")
    await db_session.commit()

    stored = await db_session.get(Order, order.id, populate_existing=True)
    assert stored.total_price == Decimal("20.00")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_with_unknown_product_writes_nothing(db_session):
    product = await _make_product(db_session, "10.00")

    with pytest.raises(HTTPException) as exc_info:
        await create_order(
            db_session, _order_in([(product.id, 1), (uuid.uuid4(), 1)])
        )

    assert exc_info.value.status_code == 400
    assert await _count(db_session, Order) == 0
    assert await _count(db_session, OrderItem) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_with_unknown_user_writes_nothing(db_session):
    product = await _make_product(db_session, "10.00")

    with pytest.raises(HTTPException) as exc_info:
        await create_order(
            db_session, _order_in([(product.id, 1)], user_id=uuid.uuid4())
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid user"
    assert await _count(db_session, OrderItem) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_failure_after_items_written_rolls_everything_back(
    db_session, monkeypatch
):
    """Items are flushed before pricing; a pricing failure must undo them."""
    product = await _make_product(db_session, "10.00")

    async def _fail(db, item_ids):
        assert item_ids  # items were written before pricing
        raise RuntimeError("price lookup failed")

    monkeypatch.setattr(order_ops, "compute_items_total", _fail)

    with pytest.raises(RuntimeError):
        await create_order(db_session, _order_in([(product.id, 2)]))

    assert await _count(db_session, OrderItem) == 0
    assert await _count(db_session, Order) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_same_product_twice_counts_both_lines(db_session):
    product = await _make_product(db_session, "4.00")

    order = await create_order(
        db_session, _order_in([(product.id, 1), (product.id, 2)])
    )

    assert order.total_price == Decimal("12.00")
    assert len(order.items) == 2


# ---------------------------------------------------------------------------
# compute_items_total
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_compute_items_total_empty_is_zero(db_session):
    assert await compute_items_total(db_session, []) == Decimal("0")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_compute_items_total_uses_current_prices(db_session):
    product = await _make_product(db_session, "2.50")
    order = OrderFactory.create()
    order.items = [OrderItem(product_id=product.id, quantity=4, position=0)]
    db_session.add(order)
    await db_session.commit()

    assert await compute_items_total(db_session, [order.items[0].id]) == Decimal(
        "10.00"
    )


# ---------------------------------------------------------------------------
# delete_order
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_order_removes_its_items(db_session):
    product = await _make_product(db_session, "10.00")
    order = await create_order(db_session, _order_in([(product.id, 1), (product.id, 2)]))
    keep = await create_order(db_session, _order_in([(product.id, 5)]))

    await delete_order(db_session, order.id)

    assert await _count(db_session, Order) == 1
    remaining = await db_session.execute(select(OrderItem.order_id))
    assert set(remaining.scalars().all()) == {keep.id}
    # Products are untouched
    assert await db_session.get(Product, product.id) is not None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_missing_order_is_404(db_session):
    with pytest.raises(HTTPException) as exc_info:
        await delete_order(db_session, uuid.uuid4())

    assert exc_info.value.status_code == 404


# ---------------------------------------------------------------------------
# total_sales
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_total_sales_is_zero_without_orders(db_session):
    assert await total_sales(db_session) == Decimal("0")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_total_sales_sums_order_totals(db_session):
    db_session.add_all(
        [
            OrderFactory.create(total_price=Decimal("25.00")),
            OrderFactory.create(total_price=Decimal("10.50")),
        ]
    )
    await db_session.commit()

    assert await total_sales(db_session) == Decimal("35.50")
