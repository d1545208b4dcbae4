"""Order router: placing orders, status updates, sales figures, per-user history."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.shop_service.models import Order
from services.shop_service.schemas import (
    MessageResponse,
    OrderCountResponse,
    OrderCreate,
    OrderResponse,
    OrderStatusUpdate,
    TotalSalesResponse,
)
from services.shop_service.services import order_ops
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

router = APIRouter(
    prefix="/orders", tags=["orders"], dependencies=[Depends(require_admin)]
)


@router.get("/", response_model=list[OrderResponse])
async def list_orders(
    db: AsyncSession = Depends(get_async_db),
):
    """All orders, newest first."""
    result = await db.execute(
        order_ops.order_details_query().order_by(
            Order.date_ordered.desc(), Order.id
        )
    )
    return [OrderResponse.model_validate(o) for o in result.scalars().all()]


@router.get("/get/totalsales", response_model=TotalSalesResponse)
async def get_total_sales(
    db: AsyncSession = Depends(get_async_db),
):
    return TotalSalesResponse(total_sales=await order_ops.total_sales(db))


@router.get("/get/count", response_model=OrderCountResponse)
async def count_orders(
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(select(func.count(Order.id)))
    return OrderCountResponse(order_count=result.scalar_one())


@router.get("/get/userorders/{user_id}", response_model=list[OrderResponse])
async def list_user_orders(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    """One user's orders, newest first."""
    result = await db.execute(
        order_ops.order_details_query()
        .where(Order.user_id == user_id)
        .order_by(Order.date_ordered.desc(), Order.id)
    )
    return [OrderResponse.model_validate(o) for o in result.scalars().all()]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    order = await order_ops.get_order_with_details(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderResponse.model_validate(order)


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_in: OrderCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Place an order; the total is priced from the current product prices."""
    order = await order_ops.create_order(db, order_in)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: uuid.UUID,
    order_in: OrderStatusUpdate,
    db: AsyncSession = Depends(get_async_db),
):
    """Change an order's status. Nothing else about an order is editable."""
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    order.status = order_in.status
    await db.commit()

    return OrderResponse.model_validate(
        await order_ops.get_order_with_details(db, order_id)
    )


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(
    order_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await order_ops.delete_order(db, order_id)
    logger.info("Order %s deleted by %s", order_id, current_user.user_id)
    return MessageResponse(message="The order is deleted!")
