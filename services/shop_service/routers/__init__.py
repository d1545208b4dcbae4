"""Shop service routers package."""

from services.shop_service.routers.categories import router as categories_router
from services.shop_service.routers.orders import router as orders_router
from services.shop_service.routers.products import router as products_router
from services.shop_service.routers.users import router as users_router

__all__ = [
    "categories_router",
    "orders_router",
    "products_router",
    "users_router",
]
