"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages (tokens and paths stay in logs)

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - DatabaseError subclasses StoreUnavailableError: callers handle both store backends alike
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    DATABASE = "database"
    CRYPTO = "crypto"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    article_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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
                    "article_id": self.context.article_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidFieldError(LedgerError):
    """Update targets a field that is not editable."""
    def __init__(self, field_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field_name
        super().__init__(
            f"Field '{field_name}' is not editable. "
            f"Only holderName and amount can be updated.",
            "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_name = field_name


class InvalidAmountError(LedgerError):
    """Amount update value is not numeric (strict mode only)."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = "amount"
        super().__init__(
            f"Amount must be numeric, got {value!r}",
            "INVALID_AMOUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.value = value


class InvalidRequestError(LedgerError):
    """Request path or body failed schema validation (missing field/value, bad JSON)."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class ResourceNotFoundError(LedgerError):
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


class ArticleNotFoundError(ResourceNotFoundError):
    """Update references an unknown article id."""
    def __init__(self, article_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.article_id = article_id
        super().__init__("Article", article_id, ctx)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(LedgerError):
    """Record collection cannot be read or written."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "STORE_UNAVAILABLE",
        category: ErrorCategory = ErrorCategory.STORAGE,
    ):
        super().__init__(
            f"Record store {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DatabaseError(StoreUnavailableError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, context,
            code="DATABASE_ERROR", category=ErrorCategory.DATABASE,
        )


class DecryptionError(LedgerError):
    """Token could not be decrypted (bad hex, wrong key, corrupted ciphertext)."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Decryption failed: {reason}",
            "DECRYPTION_FAILED", ErrorCategory.CRYPTO,
            ErrorSeverity.WARNING, context, 500,
        )
        self.reason = reason


class UnexpectedError(LedgerError):
    """Anything no other handler claimed; the message never carries the cause."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
