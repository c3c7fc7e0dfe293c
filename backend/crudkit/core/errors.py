"""Error Hierarchy — typed, categorized exceptions for REST action failures.

Invariants:
    - Every CrudKitError has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and an http_status, so it is already classified when it reaches the action boundary
    - ConfigurationError is NOT a CrudKitError: it signals a wiring defect and is
      never converted into a client-facing status
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CrudKitError base: one global handler renders all of them
    - HttpError carries the original cause, which makes it the classified error shape
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    RESOURCE_NOT_FOUND = "resource_not_found"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request context attached to an error for logging and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    action: str | None = None
    resource: str | None = None
    identifier: str | None = None
    debug_info: dict[str, Any] | None = None


class ConfigurationError(RuntimeError):
    """A controller or resource is missing a required collaborator.

    Raised fail-fast and intentionally left unclassified: it terminates the
    request and ends in the catch-all 500 handler.
    """


class CrudKitError(Exception):
    """Base exception for all crudkit errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers = headers

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
                    "action": self.context.action,
                    "resource": self.context.resource,
                    "identifier": self.context.identifier,
                },
            }
        }


# ─── Classified HTTP Errors ─────────────────────────────────────

_CATEGORY_BY_STATUS = {
    400: ErrorCategory.BAD_REQUEST,
    404: ErrorCategory.RESOURCE_NOT_FOUND,
    405: ErrorCategory.METHOD_NOT_ALLOWED,
}


class HttpError(CrudKitError):
    """An exception translated into an HTTP status/message pair.

    `cause` keeps the original exception (also chained as __cause__ by callers).
    """

    def __init__(
        self,
        http_status: int,
        message: str,
        cause: BaseException | None = None,
        headers: dict[str, str] | None = None,
        context: ErrorContext | None = None,
    ):
        category = _CATEGORY_BY_STATUS.get(
            http_status,
            ErrorCategory.INTERNAL if http_status >= 500 else ErrorCategory.BAD_REQUEST,
        )
        super().__init__(
            message, f"HTTP_{http_status}", category,
            ErrorSeverity.CRITICAL if http_status >= 500 else ErrorSeverity.ERROR,
            context, http_status, headers,
        )
        self.cause = cause

    @property
    def status_code(self) -> int:
        return self.http_status


class MethodNotAllowedError(HttpError):
    """Request verb is not in the action's allow-list."""

    def __init__(
        self,
        method: str,
        allowed_methods: list[str] | tuple[str, ...],
        context: ErrorContext | None = None,
    ):
        self.allowed_methods = list(allowed_methods)
        super().__init__(
            405,
            f"Method '{method}' not allowed. Allowed: {', '.join(self.allowed_methods)}",
            headers={"Allow": ", ".join(self.allowed_methods)},
            context=context,
        )
        self.code = "METHOD_NOT_ALLOWED"


class NotFoundError(HttpError):
    """Requested entity does not exist."""

    def __init__(
        self, message: str = "Not found", cause: BaseException | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(404, message, cause=cause, context=context)
        self.code = "RESOURCE_NOT_FOUND"


@dataclass
class FieldError:
    """One field-level violation produced while binding a form."""
    field: str
    message: str
    type: str = "value_error"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "type": self.type}


class ValidationFailedError(HttpError):
    """Bound form data did not validate; carries per-field violations."""

    def __init__(
        self,
        errors: list[FieldError],
        message: str = "Invalid request data",
        context: ErrorContext | None = None,
    ):
        super().__init__(400, message, context=context)
        self.code = "VALIDATION_ERROR"
        self.category = ErrorCategory.VALIDATION
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [e.to_dict() for e in self.errors]
        return response


class InvalidQueryParameterError(HttpError):
    """A `where`, `order`, `search` or paging parameter could not be parsed."""

    def __init__(self, parameter: str, message: str, context: ErrorContext | None = None):
        super().__init__(400, message, context=context)
        self.code = "INVALID_QUERY_PARAMETER"
        self.parameter = parameter
