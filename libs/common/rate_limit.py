"""Rate limiting configuration for the shop API.

Uses slowapi with in-process storage; credentials endpoints get a strict tier.
"""

from functools import lru_cache
from typing import Callable

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from libs.common.config import get_settings
from libs.common.error_handler import error_response


def _get_client_ip(request: Request) -> str:
    """
    Get client IP from request, handling proxies.

    Checks X-Forwarded-For header first (for proxied requests),
    then falls back to direct connection IP.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP in the chain is the original client
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


@lru_cache
def get_limiter() -> Limiter:
    """
    Create and return a cached Limiter instance.
    """
    settings = get_settings()

    return Limiter(
        key_func=_get_client_ip,
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = get_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Render rate limit errors in the shared error envelope with a Retry-After header.
    """
    # exc.detail reads like "10 per 1 minute"; the window length is the retry hint
    window = exc.limit.limit.get_expiry() if getattr(exc, "limit", None) else 60

    return error_response(
        429,
        f"Rate limit exceeded: {exc.detail}",
        headers={"Retry-After": str(window)},
    )


def auth_limit(func: Callable) -> Callable:
    """Apply the login rate limit configured in settings."""
    return limiter.limit(lambda: get_settings().LOGIN_RATE_LIMIT)(func)
