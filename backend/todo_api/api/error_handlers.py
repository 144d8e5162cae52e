"""Error Handlers: global exception handlers for the Todo API.

Invariants:
    - TodoError → its own envelope and the status mapped from its category
    - RequestValidationError → MalformedRequestError envelope (400) with field details
    - Unparseable JSON reports "Invalid JSON"; wrong shape reports "Invalid request body"

Design Decisions:
    - Unhandled exceptions are not handled here: api/middleware.py recovers them
      per request so the request log still records the 500
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_api.core.errors import MalformedRequestError, TodoError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_todo_error_handler(app)
    _register_validation_error_handler(app)


def _register_todo_error_handler(app: FastAPI) -> None:
    """Register domain/storage error handler."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"TodoError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "task_id": exc.context.task_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Malformed request on {request.url.path}: {exc.errors()}",
            extra={"error_code": "MALFORMED_REQUEST", "path": request.url.path},
        )
        error = build_malformed_request_error(exc)
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def build_malformed_request_error(
    exc: RequestValidationError,
) -> MalformedRequestError:
    """Translate Pydantic errors into a MalformedRequestError."""
    errors = exc.errors()
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    if any(e["type"] == "json_invalid" for e in errors):
        return MalformedRequestError("Invalid JSON", details)
    return MalformedRequestError("Invalid request body", details)
