"""Product router: catalog listing with category filter, CRUD, count, featured."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.shop_service.models import Category, Product
from services.shop_service.schemas import (
    MessageResponse,
    ProductCountResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def parse_category_filter(categories: Optional[str]) -> Optional[set[uuid.UUID]]:
    """Parse ``?categories=<id>,<id>`` into a set of ids; ``None`` means no filter."""
    if not categories:
        return None
    raw_ids = [part.strip() for part in categories.split(",") if part.strip()]
    if not raw_ids:
        return None
    try:
        return {uuid.UUID(raw) for raw in raw_ids}
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid category id in filter")


async def _ensure_category_exists(db: AsyncSession, category_id: uuid.UUID) -> None:
    if not await db.get(Category, category_id):
        raise HTTPException(status_code=400, detail="Invalid category")


async def _get_product_or_404(db: AsyncSession, product_id: uuid.UUID) -> Product:
    result = await db.execute(
        select(Product)
        .where(Product.id == product_id)
        .options(selectinload(Product.category))
        .execution_options(populate_existing=True)
    )
    product = result.scalar_one_or_none()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/", response_model=list[ProductResponse])
async def list_products(
    categories: Optional[str] = Query(
        None, description="Comma-separated category ids"
    ),
    db: AsyncSession = Depends(get_async_db),
):
    """List products, optionally restricted to a set of categories."""
    category_ids = parse_category_filter(categories)

    query = select(Product).options(selectinload(Product.category))
    if category_ids is not None:
        query = query.where(Product.category_id.in_(category_ids))
    query = query.order_by(Product.date_created, Product.id)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/get/count", response_model=ProductCountResponse)
async def count_products(
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(select(func.count(Product.id)))
    return ProductCountResponse(product_count=result.scalar_one())


@router.get("/get/featured/{count}", response_model=list[ProductResponse])
async def list_featured_products(
    count: int = Path(..., ge=0),
    db: AsyncSession = Depends(get_async_db),
):
    """Up to ``count`` featured products, oldest first."""
    if count == 0:
        return []
    result = await db.execute(
        select(Product)
        .where(Product.is_featured.is_(True))
        .options(selectinload(Product.category))
        .order_by(Product.date_created, Product.id)
        .limit(count)
    )
    return result.scalars().all()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    return await _get_product_or_404(db, product_id)


@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a product. The category must exist."""
    await _ensure_category_exists(db, product_in.category_id)

    product = Product(**product_in.model_dump())
    db.add(product)
    await db.commit()

    logger.info("Product %s created by %s", product.id, current_user.user_id)
    return await _get_product_or_404(db, product.id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    product_in: ProductUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Update a product. A supplied category must exist; nothing is written otherwise."""
    product = await _get_product_or_404(db, product_id)

    update_data = product_in.model_dump(exclude_unset=True)
    if update_data.get("category_id") is not None:
        await _ensure_category_exists(db, update_data["category_id"])

    for field, value in update_data.items():
        if value is None:
            continue
        setattr(product, field, value)

    await db.commit()
    return await _get_product_or_404(db, product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found!")

    await db.delete(product)
    await db.commit()

    logger.info("Product %s deleted by %s", product_id, current_user.user_id)
    return MessageResponse(message="The product is deleted!")
