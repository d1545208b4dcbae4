"""User account operations: registration, profile updates, credential checks."""

import uuid
from datetime import timedelta

from fastapi import HTTPException, status
from libs.auth.security import create_access_token, hash_password, verify_password
from libs.common.config import Settings
from libs.common.logging import get_logger
from services.shop_service.models import User
from services.shop_service.schemas import UserCreate, UserUpdate
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

# Same response for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


async def _ensure_email_free(
    db: AsyncSession, email: str, exclude_id: uuid.UUID | None = None
) -> None:
    query = select(User.id).where(User.email == email)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    existing = await db.execute(query)
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )


async def create_user(db: AsyncSession, user_in: UserCreate, settings: Settings) -> User:
    """Hash the plaintext password and persist the full profile."""
    await _ensure_email_free(db, user_in.email)

    data = user_in.model_dump(exclude={"password"})
    user = User(
        **data,
        password_hash=hash_password(user_in.password, rounds=settings.BCRYPT_ROUNDS),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Created user %s (admin=%s)", user.id, user.is_admin)
    return user


async def update_user(
    db: AsyncSession, user_id: uuid.UUID, user_in: UserUpdate, settings: Settings
) -> User:
    """Apply a partial profile update.

    The stored hash is replaced only when a new plaintext password is supplied.
    """
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    update_data = user_in.model_dump(exclude_unset=True)
    password = update_data.pop("password", None)

    if update_data.get("email") and update_data["email"] != user.email:
        await _ensure_email_free(db, update_data["email"], exclude_id=user.id)

    for field, value in update_data.items():
        if value is None:
            continue
        setattr(user, field, value)

    if password:
        user.password_hash = hash_password(password, rounds=settings.BCRYPT_ROUNDS)

    await db.commit()
    await db.refresh(user)
    return user


async def authenticate(
    db: AsyncSession, email: str, password: str, settings: Settings
) -> tuple[User, str]:
    """Check credentials and issue an access token.

    Unknown email and wrong password raise the same 400.
    """
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if not verify_password(password, user.password_hash if user else None):
        logger.info("Rejected login attempt")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS
        )

    token = create_access_token(
        user.id,
        user.is_admin,
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return user, token
