"""Error Hierarchy — typed, categorized exceptions for every BFF failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the wire envelope {message, statusCode, errors?}
    - errors key omitted from the envelope when there is no field-level list
    - Upstream pass-through keeps the upstream's own message, status and errors

Design Decisions:
    - Single hierarchy with BffError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Upstream 400/401/403/404 mapped to the matching typed subclass so handlers
      can catch a specific kind for fallback; other statuses stay UpstreamError
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    service: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class BffError(Exception):
    """Base exception for all BFF errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.errors = errors

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        envelope: dict[str, Any] = {
            "message": self.message,
            "statusCode": self.http_status,
        }
        if self.errors is not None:
            envelope["errors"] = self.errors
        return envelope


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(BffError):
    """Malformed or missing input."""
    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, errors,
        )


class UnauthorizedError(BffError):
    """Missing, malformed, invalid or expired credential."""
    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401, errors,
        )


class ForbiddenError(BffError):
    """Authenticated but not entitled to the resource."""
    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403, errors,
        )


class NotFoundError(BffError):
    """Upstream reports the entity absent."""
    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404, errors,
        )


class UpstreamError(BffError):
    """Upstream rejected the request with a status we pass through verbatim."""
    def __init__(
        self,
        message: str,
        http_status: int,
        errors: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, http_status, errors,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ServiceUnavailableError(BffError):
    """Upstream unreachable or timed out."""
    def __init__(self, service: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.service = service
        super().__init__(
            f"{service} service is unavailable",
            "SERVICE_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.service = service


class InternalError(BffError):
    """Unclassified failure: request construction, malformed upstream body."""
    def __init__(
        self,
        message: str = "Internal server error",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


_UPSTREAM_STATUS_MAP: dict[int, type[BffError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def error_from_upstream(
    status: int,
    message: str,
    errors: list[str] | None = None,
    service: str | None = None,
) -> BffError:
    """Build the typed error for an upstream error response."""
    context = ErrorContext(service=service)
    error_cls = _UPSTREAM_STATUS_MAP.get(status)
    if error_cls is not None:
        return error_cls(message, errors, context)
    return UpstreamError(message, status, errors, context)
