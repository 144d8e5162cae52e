"""Request Middleware: access logging and per-request failure recovery.

Invariants:
    - Every request produces one log line with method, path, status_code, latency_ms
    - An exception escaping a route becomes a 500 for that request only;
      the response never contains the exception text
"""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from todo_api.core.errors import internal_error_response

logger = logging.getLogger(__name__)


def register_request_middleware(app: FastAPI) -> None:
    """Install the logging/recovery middleware. Must run before CORS is added."""

    @app.middleware("http")
    async def log_and_recover(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.url.path}: {exc}",
                exc_info=True,
                extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=internal_error_response(),
            )
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {latency_ms}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
            },
        )
        return response
