"""
Logging Middleware - request correlation and request/response logging
"""
import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a request id and logs it

    Logs:
    - Request method, path, query
    - Response status code, duration
    - Errors (logged, then re-raised to the exception handlers)

    The id is taken from an incoming X-Request-ID header when present,
    stored on request.state and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        if request.url.path in QUIET_PATHS:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        method = request.method
        path = request.url.path
        start_time = time.perf_counter()

        logger.info(
            f"→ {method} {path}",
            extra={
                "request_id": request_id,
                "query_params": dict(request.query_params),
                "client_host": request.client.host if request.client else "unknown",
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                f"✗ {method} {path} ERROR ({duration_ms}ms): {e}",
                extra={"request_id": request_id, "error_type": type(e).__name__},
                exc_info=True
            )
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"← {method} {path} {response.status_code} ({duration_ms}ms)",
            extra={"request_id": request_id, "status_code": response.status_code}
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)
        return response
