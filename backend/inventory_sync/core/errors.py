"""Error Hierarchy — typed, categorized exceptions for all sync failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Invocation-level errors abort a sync pass; per-record/per-row errors never do
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with InventorySyncError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - MissingKey / StoreWriteFailure / SortFailure are codes, not exceptions: they are
      recorded as per-record outcomes and never cross the engine boundary
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
    SCHEMA = "schema"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    STORE = "store"
    INTERNAL = "internal"


class FailureCode(str, Enum):
    """Codes for recoverable, locally-handled failures (reported, never raised)."""
    MISSING_KEY = "MISSING_KEY"
    STORE_WRITE_FAILURE = "STORE_WRITE_FAILURE"
    SORT_FAILURE = "SORT_FAILURE"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    store_name: str | None = None
    key_value: str | None = None
    row_position: int | None = None
    debug_info: dict[str, Any] | None = None


class InventorySyncError(Exception):
    """Base exception for all inventory sync errors."""

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
                    "store_name": self.context.store_name,
                    "key_value": self.context.key_value,
                    "row_position": self.context.row_position,
                },
            }
        }


# ─── Invocation Errors (400-level) ───────────────────────────────

class EmptyBatchError(InventorySyncError):
    """No records supplied — nothing to reconcile."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Sync batch contains no records",
            "EMPTY_BATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class SchemaConflictError(InventorySyncError):
    """Key field absent from both the store header and the batch."""
    def __init__(self, key_field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Key field '{key_field}' is missing from both the store header "
            f"and the incoming batch",
            "SCHEMA_CONFLICT", ErrorCategory.SCHEMA,
            ErrorSeverity.ERROR, context, 409,
        )
        self.key_field = key_field


class ResourceNotFoundError(InventorySyncError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(InventorySyncError):
    """Reading from or initializing the store failed — the pass cannot proceed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DatabaseError(InventorySyncError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

