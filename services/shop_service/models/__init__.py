"""Shop Service models package."""

from services.shop_service.models.accounts import User
from services.shop_service.models.catalog import Category, Product
from services.shop_service.models.commerce import (
    DEFAULT_ORDER_STATUS,
    Order,
    OrderItem,
)

__all__ = [
    "Category",
    "DEFAULT_ORDER_STATUS",
    "Order",
    "OrderItem",
    "Product",
    "User",
]
