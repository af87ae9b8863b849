"""
FastAPI middleware for request tracing.

Every search request gets a short request id bound into the structlog
context, so extractor fallbacks and storage failures logged deep inside
the search pipeline can be correlated with the request that caused them.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import bind_context, clear_context, get_logger


logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Health endpoints hit every few seconds by the orchestrator; logged at debug
_HEALTH_PATHS = frozenset({"/health", "/ready", "/live"})


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Binds request_id/method/path into the log context for one request.

    - Reuses an incoming X-Request-ID header or generates a new id
    - Logs one completion line per request with status and elapsed ms
      (error level for 5xx, debug level for health endpoints)
    - Echoes X-Request-ID on the response
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        path = request.url.path
        bind_context(request_id=request_id, method=request.method, path=path)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                elapsed_ms=_elapsed_ms(started),
            )
            raise
        else:
            if response.status_code >= 500:
                log = logger.error
            elif path in _HEALTH_PATHS:
                log = logger.debug
            else:
                log = logger.info
            log("Request completed", status_code=response.status_code, elapsed_ms=_elapsed_ms(started))

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
