"""Error Hierarchy — typed, categorized exceptions for every qtrack failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation, state and authorization failures are distinct classes: callers branch on type
    - to_response() produces the REST envelope the service layer hands outward
    - Messages are stable strings; tests and callers match on them

Design Decisions:
    - Single hierarchy with QtrackError base: one catch point for the service layer
    - ValidationError is also a ValueError so generic callers still see bad input as bad input
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
    BUSINESS_RULE = "business_rule"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: int | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class QtrackError(Exception):
    """Base exception for all qtrack errors."""

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
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(QtrackError, ValueError):
    """Malformed, missing or out-of-range input."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class IllegalStateError(QtrackError):
    """Operation not legal in the entity's current lifecycle state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ILLEGAL_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class PermissionDeniedError(QtrackError):
    """Actor is not the owner of the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class ResourceNotFoundError(QtrackError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = resource_type
        ctx.entity_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Storage Errors ─────────────────────────────────────────────

class ConcurrencyError(QtrackError):
    """Concurrent modification detected; the stored version moved on."""
    def __init__(
        self, entity: str, entity_id: int, expected: int, actual: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.entity_id = entity_id
        super().__init__(
            f"{entity} '{entity_id}' version conflict: expected {expected}, found {actual}",
            "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.expected = expected
        self.actual = actual
