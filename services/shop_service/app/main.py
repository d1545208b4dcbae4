"""FastAPI application for the Shop Service."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from libs.common.config import Settings, get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.shop_service.routers import (
    categories_router,
    orders_router,
    products_router,
    users_router,
)
from slowapi.errors import RateLimitExceeded


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the Shop Service FastAPI app."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Shop Service",
        version="0.1.0",
        description="E-commerce backend - categories, products, users, orders.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Structured logging + request tracing
    add_observability_middleware(app)

    # Consistent error envelopes
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "shop"}

    app.include_router(categories_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(users_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
