"""Error Hierarchy — typed, categorized exceptions for all Plant Store failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are client-caused; infrastructure errors (500-level) are critical
    - to_response() produces the uniform envelope {success, data?, message}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PlantStoreError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging framework
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    plant_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class PlantStoreError(Exception):
    """Base exception for all Plant Store errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.data = data

    def to_response(self) -> dict:
        """Convert to the uniform failure envelope."""
        response: dict[str, Any] = {"success": False, "message": self.message}
        if self.data is not None:
            response["data"] = self.data
        return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(PlantStoreError):
    """Request field missing, malformed, or out of range."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class PlantNotFoundError(PlantStoreError):
    """Identifier does not resolve to a plant (malformed ids included)."""
    def __init__(self, plant_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.plant_id = plant_id
        super().__init__(
            "Plant not found", "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.plant_id = plant_id


class InsufficientStockError(PlantStoreError):
    """Requested purchase exceeds the stock available right now."""
    def __init__(
        self, current_quantity: int, requested: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Only {current_quantity} items available in stock",
            "INSUFFICIENT_STOCK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
            data={"currentQuantity": current_quantity},
        )
        self.current_quantity = current_quantity
        self.requested = requested


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(PlantStoreError):
    """Catalog store unreachable; safe to retry later."""
    def __init__(self, operation: str = "probe", context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "Database is not available at this time. Please try again later.",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class InternalError(PlantStoreError):
    """Unexpected fault. Message is generic; details only go to the logs."""
    def __init__(
        self, message: str = "Something went wrong!",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
