"""Error Hierarchy — typed, categorized exceptions for all Taskflow failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the http_status its envelope reports
    - to_envelope() produces the {code, message, details} service result
    - to_response() produces the REST error body used by global handlers

Design Decisions:
    - Single hierarchy with TaskflowError base: the service boundary and the
      FastAPI global handler both catch it (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from taskflow.core.envelope import Envelope


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers and debug data attached to an error for log correlation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: str | None = None
    project_id: str | None = None
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskflowError(Exception):
    """Base exception for all Taskflow errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_envelope(self) -> Envelope:
        """Convert to the service result envelope."""
        return Envelope(
            code=self.http_status,
            message=self.message,
            details=self.details if self.details is not None else self.message,
        )

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "code": self.http_status,
            "message": self.message,
            "details": self.details,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(TaskflowError):
    """Command argument has an unacceptable value or shape."""
    def __init__(
        self, message: str, field: str, details: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, details,
        )
        self.field = field


class ResourceNotFoundError(TaskflowError):
    """Referenced Project, Task or User does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
            f"{resource_type} with id {resource_id} does not exist!",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(TaskflowError):
    """Uniqueness violated, by the pre-check or by a store constraint."""
    def __init__(
        self, message: str, details: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409, details,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(TaskflowError):
    """Unexpected failure; details carry the stringified cause."""
    def __init__(
        self, cause: str, message: str = "Internal server error",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500, cause,
        )


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context=context)
        self.code = "DATABASE_ERROR"
        self.category = ErrorCategory.DATABASE
        self.operation = operation


class NotificationDispatchError(TaskflowError):
    """Notification collaborator raised instead of returning an envelope."""
    def __init__(self, cause: str, context: ErrorContext | None = None):
        super().__init__(
            "Error creating notification", "NOTIFICATION_DISPATCH_FAILED",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.WARNING, context, 500, cause,
        )
