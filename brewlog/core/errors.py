"""Error Hierarchy — typed, categorized exceptions for all BrewLog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Decode errors (malformed wire input) and business-rule errors (well-formed but invalid)
      are distinct classes with distinct codes
    - Domain errors (400-level) are per-request; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; no internal details in user-facing messages

Design Decisions:
    - Single hierarchy with BrewLogError base: one global handler catches all (ADR: uniform error shape)
    - EnumDecodeError also subclasses ValueError: Pydantic wraps it into a field error and keeps
      the original exception in the error context, so the API boundary can still recognise it
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    resource_id: int | None = None
    debug_info: dict[str, Any] | None = None


class BrewLogError(Exception):
    """Base exception for all BrewLog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
            }
        }


# ─── Decode Errors (malformed wire input) ───────────────────────

class EnumDecodeError(BrewLogError, ValueError):
    """A symbolic value could not be decoded from its external representation."""

    reason = "unsupported_shape"

    def __init__(
        self, message: str, type_name: str, value: Any, valid_values: list[str],
    ):
        super().__init__(
            message, "INVALID_ENUM_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, None, 400,
        )
        self.type_name = type_name
        self.value = value
        self.valid_values = list(valid_values)

    def to_detail(self, field_name: str | None = None) -> dict:
        """Field-level detail entry for the malformed-request response."""
        return {
            "field": field_name,
            "message": self.message,
            "type": f"enum_{self.reason}",
            "value": self.value if isinstance(self.value, (str, int)) else repr(self.value),
            "valid_values": self.valid_values,
        }


class UnknownNameError(EnumDecodeError):
    """String input matched no canonical name (case-insensitively)."""

    reason = "unknown_name"

    def __init__(self, type_name: str, value: str, valid_values: list[str]):
        super().__init__(
            f"Unable to convert '{value}' to {type_name}. "
            f"Valid values are: {', '.join(valid_values)}",
            type_name, value, valid_values,
        )


class UnknownOrdinalError(EnumDecodeError):
    """Integer input matched no defined ordinal."""

    reason = "unknown_ordinal"

    def __init__(self, type_name: str, value: int, valid_values: list[str]):
        super().__init__(
            f"Unable to convert {value} to {type_name}. "
            f"Valid values are: {', '.join(valid_values)}",
            type_name, value, valid_values,
        )


class UnsupportedShapeError(EnumDecodeError):
    """Input was neither a string nor an integer."""

    reason = "unsupported_shape"

    def __init__(self, type_name: str, value: Any, valid_values: list[str]):
        super().__init__(
            f"Unexpected value of type {type(value).__name__} when parsing {type_name}. "
            f"Valid values are: {', '.join(valid_values)}",
            type_name, value, valid_values,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class BusinessValidationError(BrewLogError):
    """One or more business rules failed; carries every field error found."""
    def __init__(self, errors: list[dict], context: ErrorContext | None = None):
        messages = ", ".join(e["message"] for e in errors)
        super().__init__(
            f"Validation failed: {messages}",
            "BUSINESS_VALIDATION_ERROR", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400, errors,
        )
        self.errors = errors


class ResourceNotFoundError(BrewLogError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: int):
        super().__init__(
            f"{resource_type} with ID {resource_id} was not found.",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource_type, resource_id=resource_id),
            404,
        )


class ReferentialIntegrityError(BrewLogError):
    """Delete refused because other records still reference the row."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "REFERENTIAL_INTEGRITY_ERROR", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BrewLogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
