"""Error Hierarchy — typed, categorized exceptions for every admin console failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a safe message; dependency errors never expose internals
    - to_response() always produces the {success, message, error} envelope

Design Decisions:
    - Single hierarchy with AdminConsoleError base: one global FastAPI handler catches all
    - ErrorContext as dataclass: observability detail stays server side, never serialized
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Server-side context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class FieldIssue:
    """One offending request field and what is wrong with it."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AdminConsoleError(Exception):
    """Base exception for all admin console errors."""

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
    def public_message(self) -> str:
        """Message safe to show to the caller."""
        return self.message

    def to_response(self) -> dict:
        """Convert to the standard response envelope."""
        return {
            "success": False,
            "message": self.public_message,
            "error": self.code,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(AdminConsoleError):
    """No valid session accompanies the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(AdminConsoleError):
    """Valid session, but the principal is not an admin."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Admin access required", "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class RequestValidationFailed(AdminConsoleError):
    """One or more request fields failed validation. Lists all of them."""
    def __init__(self, issues: list[FieldIssue], context: ErrorContext | None = None):
        super().__init__(
            "Invalid query parameters", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.issues = issues

    def to_response(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "error": ", ".join(f"{i.field}: {i.message}" for i in self.issues),
            "details": [i.to_dict() for i in self.issues],
        }


class ResourceNotFoundError(AdminConsoleError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Dependency Errors (500-level) ──────────────────────────────

class DependencyFailure(AdminConsoleError):
    """A backing store was unreachable or returned an error."""

    def __init__(
        self, message: str, code: str, category: ErrorCategory,
        operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    @property
    def public_message(self) -> str:
        return "An unexpected error occurred"


class DatabaseError(DependencyFailure):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, operation, context,
        )


class CacheError(DependencyFailure):
    """Key-value store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_ERROR", ErrorCategory.CACHE, operation, context,
        )
