"""Error Hierarchy — typed, categorized exceptions for all Salescope failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are never logged as server faults
    - Infrastructure and aggregation errors (500-level) carry enough context to
      tell "no data" apart from "failure"
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with SalescopeError base: FastAPI global handler catches all
      (ADR: uniform error shape)
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
    DATA_UNAVAILABLE = "data_unavailable"
    AGGREGATION = "aggregation"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    month: int | None = None
    snapshot_version: int | None = None
    debug_info: dict[str, Any] | None = None


class SalescopeError(Exception):
    """Base exception for all Salescope errors."""

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
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500

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
                    "month": self.context.month,
                    "snapshot_version": self.context.snapshot_version,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InvalidMonthError(SalescopeError):
    """Month name is not one of the twelve English month names."""
    def __init__(self, month_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid month: '{month_name}'",
            "INVALID_MONTH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.month_name = month_name


# ─── Server Errors (500-level) ──────────────────────────────────

class DataUnavailableError(SalescopeError):
    """Transaction store reference was never initialized."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Transaction store is not initialized",
            "DATA_UNAVAILABLE", ErrorCategory.DATA_UNAVAILABLE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class AggregationFailureError(SalescopeError):
    """One or more sub-aggregations of a combined view failed."""
    def __init__(self, failed: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Aggregation failed: {', '.join(failed)}",
            "AGGREGATION_FAILED", ErrorCategory.AGGREGATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.failed = failed

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["failed"] = self.failed
        return response


class DatabaseError(SalescopeError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SeedSourceError(SalescopeError):
    """Seed dataset could not be fetched or was malformed."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Seed source error: {message}",
            "SEED_SOURCE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.status_code = status_code
