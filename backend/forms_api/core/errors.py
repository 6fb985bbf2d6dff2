"""Error Hierarchy — typed, categorized exceptions for all Forms API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error exposes problems: the human-readable strings sent in the envelope
    - Request errors (400-level) are the caller's fault; store errors (500-level) are not
    - to_response() produces the Error envelope (core/envelope.py)
    - No driver details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FormsError base: handler boundary catches all (ADR: uniform error shape)
    - NotFound carries its own code (SCHEMA_NOT_FOUND / FIELD_NOT_FOUND) so the wire
      distinguishes it from a generic store failure
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from forms_api.core import envelope


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    REQUEST = "request"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class FormsError(Exception):
    """Base exception for all Forms API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def problems(self) -> list[str]:
        return [self.message]

    def to_response(self) -> dict:
        """Convert to the Error envelope."""
        return envelope.error(self.problems, self.code)


# ─── Request Errors (400-level) ─────────────────────────────────

class EmptyBodyError(FormsError):
    """Request arrived without a body."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "empty request", "EMPTY_BODY", ErrorCategory.REQUEST,
            ErrorSeverity.WARNING, context, 400,
        )


class MalformedBodyError(FormsError):
    """Request body is not a decodable JSON object."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            "failed to decode request", "MALFORMED_BODY", ErrorCategory.REQUEST,
            ErrorSeverity.WARNING, context, 400,
        )
        self.detail = detail


class ValidationFailedError(FormsError):
    """One or more request fields violate their constraints."""
    def __init__(self, problems: list[str], context: ErrorContext | None = None):
        super().__init__(
            "invalid request", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self._problems = list(problems)

    @property
    def problems(self) -> list[str]:
        return list(self._problems)


class ResourceNotFoundError(FormsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            f"{resource_type.upper()}_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class SchemaNotFoundError(ResourceNotFoundError):
    def __init__(self, schema_id: int, context: ErrorContext | None = None):
        super().__init__("schema", schema_id, context)


class FieldNotFoundError(ResourceNotFoundError):
    def __init__(self, field_id: int, context: ErrorContext | None = None):
        super().__init__("field", field_id, context)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreFailureError(FormsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
