"""User router: profiles, registration and login."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.config import Settings, get_settings
from libs.common.logging import get_logger
from libs.common.rate_limit import auth_limit
from libs.db.session import get_async_db
from services.shop_service.models import User
from services.shop_service.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    UserCountResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from services.shop_service.services.user_ops import (
    authenticate,
    create_user,
    update_user,
)
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserResponse])
async def list_users(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(select(User).order_by(User.created_at, User.id))
    return result.scalars().all()


@router.get("/get/count", response_model=UserCountResponse)
async def count_users(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(select(func.count(User.id)))
    return UserCountResponse(user_count=result.scalar_one())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/", response_model=UserResponse)
async def create_user_admin(
    user_in: UserCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
):
    """Create a user on behalf of an admin."""
    return await create_user(db, user_in, settings)


@router.post("/register", response_model=UserResponse)
async def register(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
):
    """Public sign-up. Self-registered accounts are never admins."""
    user_in = user_in.model_copy(update={"is_admin": False})
    return await create_user(db, user_in, settings)


@router.post("/login", response_model=LoginResponse)
@auth_limit
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a one-day access token."""
    user, token = await authenticate(
        db, credentials.email, credentials.password, settings
    )
    return LoginResponse(user=user.email, token=token)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user_profile(
    user_id: uuid.UUID,
    user_in: UserUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
):
    return await update_user(db, user_id, user_in, settings)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Delete a user. Their orders are kept with no user reference."""
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    await db.delete(user)
    await db.commit()

    logger.info("User %s deleted by %s", user_id, current_user.user_id)
    return MessageResponse(message="The user is deleted!")
