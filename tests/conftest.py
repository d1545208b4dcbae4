import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

# Optional developer overrides for the test run
env_test_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=False)

# Settings are read on first import of libs.*, so defaults go in first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./shop-test.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from libs.auth.security import create_access_token  # noqa: E402
from libs.common.config import Settings, get_settings  # noqa: E402
from libs.db.base import Base  # noqa: E402
from libs.db.config import build_sessionmaker, enable_sqlite_foreign_keys  # noqa: E402
from libs.db.session import get_async_db  # noqa: E402
from services.shop_service import models as _shop_models  # noqa: E402,F401
from services.shop_service.app.main import app  # noqa: E402
from tests.factories import UserFactory  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    A throwaway SQLite database per test, with foreign keys enforced so
    ON DELETE rules behave as they do on PostgreSQL.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}", poolclass=NullPool
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_sessionmaker(test_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient bound to the app; every request gets its own session on the
    test database, like production.
    """

    async def _override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = _override_get_async_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def make_auth_headers(user, settings: Settings) -> dict:
    token = create_access_token(
        user.id, user.is_admin, secret=settings.JWT_SECRET
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_user(db_session):
    user = UserFactory.create(is_admin=True, name="Admin")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def customer_user(db_session):
    user = UserFactory.create(is_admin=False, name="Customer")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user, settings) -> dict:
    return make_auth_headers(admin_user, settings)


@pytest.fixture
def customer_headers(customer_user, settings) -> dict:
    return make_auth_headers(customer_user, settings)
