"""Error Hierarchy: typed, categorized exceptions for every Todo API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - HTTP status is derived from the category via HTTP_STATUS_BY_CATEGORY only
    - Storage errors carry the underlying driver message verbatim
    - to_response() produces the REST envelope used by every error response

Design Decisions:
    - Single hierarchy with TodoError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories; each maps to exactly one HTTP status."""
    MALFORMED_REQUEST = "malformed_request"
    VALIDATION = "validation"
    STORAGE = "storage"
    INTERNAL = "internal"


HTTP_STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.MALFORMED_REQUEST: 400,
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.STORAGE: 500,
    ErrorCategory.INTERNAL: 500,
}


@dataclass
class ErrorContext:
    """Request-scoped details attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TodoError(Exception):
    """Base exception for all Todo API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CATEGORY[self.category]

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "task_id": self.context.task_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class MalformedRequestError(TodoError):
    """Request body unreadable or not the expected JSON shape."""
    def __init__(
        self,
        message: str = "Invalid JSON",
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "MALFORMED_REQUEST", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, context,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class ValidationError(TodoError):
    """Well-formed request that breaks a domain rule (e.g. empty title)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


# ─── Storage Errors (500-level) ─────────────────────────────────

class StorageError(TodoError):
    """Base for storage failures. Message is the raw driver text."""
    def __init__(
        self,
        message: str,
        code: str,
        operation: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, code, ErrorCategory.STORAGE, ErrorSeverity.CRITICAL, ctx,
        )
        self.operation = operation


class StorageInitError(StorageError):
    """Database file could not be opened or the schema statement failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "STORAGE_INIT_ERROR", "initialize", context)


class StorageQueryError(StorageError):
    """Read statement failed."""
    def __init__(
        self, message: str, operation: str = "list", context: ErrorContext | None = None,
    ):
        super().__init__(message, "STORAGE_QUERY_ERROR", operation, context)


class StorageWriteError(StorageError):
    """Insert, update or delete statement failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(message, "STORAGE_WRITE_ERROR", operation, context)


# ─── Internal (500-level) ───────────────────────────────────────

def internal_error_response() -> dict:
    """Envelope for unhandled exceptions: never includes the exception text."""
    return {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        },
    }
