"""Request tracing middleware for the shop API.

Every request gets an id (taken from ``X-Request-ID`` or generated), which is
bound to the logging context for the lifetime of the request and echoed back
on the response. Request start and completion are logged with timing.

Usage:
    from libs.common.middleware import add_observability_middleware

    app = FastAPI()
    add_observability_middleware(app)
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; not worth a log line each time
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log each request's outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        request.state.request_id = request_id
        quiet = request.url.path in QUIET_PATHS
        start = time.perf_counter()

        if not quiet:
            logger.info(
                "%s %s started",
                request.method,
                request.url.path,
                extra={"extra_fields": {"client": _client_host(request)}},
            )

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s raised",
                request.method,
                request.url.path,
                extra={"extra_fields": {"duration_ms": _elapsed_ms(start)}},
            )
            raise
        else:
            if not quiet:
                # 4xx/5xx at warning so failed calls stand out in the log
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    "%s %s -> %d",
                    request.method,
                    request.url.path,
                    response.status_code,
                    extra={"extra_fields": {
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(start),
                    }},
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()


def _client_host(request: Request) -> str | None:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def add_observability_middleware(app: FastAPI) -> None:
    """Configure logging and install the request tracing middleware on ``app``."""
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
    logger.info("Request tracing enabled")
