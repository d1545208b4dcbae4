"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(category_id=category.id, price=Decimal("5"))
    db_session.add(product)
    await db_session.commit()
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from libs.auth.security import hash_password

# Low cost factor keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4
DEFAULT_TEST_PASSWORD = "s3cret-pass"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def minutes_ago(minutes: int) -> datetime:
    return _now() - timedelta(minutes=minutes)


def _unique_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@test.com"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class CategoryFactory:
    @staticmethod
    def create(**overrides):
        from services.shop_service.models import Category

        defaults = {
            "id": _uuid(),
            "name": "Electronics",
            "icon": "icon-electronics",
            "color": "#555555",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Category(**defaults)


class ProductFactory:
    @staticmethod
    def create(category_id=None, **overrides):
        from services.shop_service.models import Product

        defaults = {
            "id": _uuid(),
            "category_id": category_id,
            "name": f"Product {uuid.uuid4().hex[:6]}",
            "description": "A test product",
            "rich_description": "",
            "image": "",
            "brand": "Acme",
            "price": Decimal("10.00"),
            "count_in_stock": 10,
            "rating": Decimal("4.5"),
            "num_reviews": 3,
            "is_featured": False,
            "date_created": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Product(**defaults)


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class UserFactory:
    @staticmethod
    def create(password: str = DEFAULT_TEST_PASSWORD, **overrides):
        from services.shop_service.models import User

        defaults = {
            "id": _uuid(),
            "name": "Test User",
            "email": _unique_email(),
            "password_hash": hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
            "phone": "+2348000000000",
            "is_admin": False,
            "street": "1 Test Street",
            "apartment": "",
            "zip": "100001",
            "city": "Lagos",
            "country": "Nigeria",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return User(**defaults)


# ---------------------------------------------------------------------------
# Commerce
# ---------------------------------------------------------------------------


class OrderFactory:
    @staticmethod
    def create(user_id=None, **overrides):
        from services.shop_service.models import Order

        defaults = {
            "id": _uuid(),
            "shipping_address1": "1 Test Street",
            "shipping_address2": None,
            "city": "Lagos",
            "zip": "100001",
            "country": "Nigeria",
            "phone": "+2348000000000",
            "status": "Pending",
            "total_price": Decimal("0"),
            "user_id": user_id,
            "date_ordered": _now(),
        }
        defaults.update(overrides)
        return Order(**defaults)


class OrderItemFactory:
    @staticmethod
    def create(order_id, product_id, **overrides):
        from services.shop_service.models import OrderItem

        defaults = {
            "id": _uuid(),
            "order_id": order_id,
            "product_id": product_id,
            "quantity": 1,
            "position": 0,
        }
        defaults.update(overrides)
        return OrderItem(**defaults)


def order_payload(items, user_id=None, **overrides) -> dict:
    """JSON body for POST /orders. ``items`` is a list of (product_id, quantity)."""
    payload = {
        "order_items": [
            {"product_id": str(product_id), "quantity": quantity}
            for product_id, quantity in items
        ],
        "shipping_address1": "12 Marina Road",
        "shipping_address2": "Flat 3",
        "city": "Lagos",
        "zip": "100001",
        "country": "Nigeria",
        "phone": "+2348000000000",
    }
    if user_id is not None:
        payload["user_id"] = str(user_id)
    payload.update(overrides)
    return payload
