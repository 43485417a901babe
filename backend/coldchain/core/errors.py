"""Error Hierarchy — typed, categorized exceptions for all registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller; infrastructure errors are critical
    - TemperatureBreachError is raised AFTER its mutation committed (severity WARNING)
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ColdChainError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shipment_id: str | None = None
    principal: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ColdChainError(Exception):
    """Base exception for all registry errors."""

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
                    "shipment_id": self.context.shipment_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ShipmentNotFoundError(ColdChainError):
    """Shipment identifier is not registered."""
    def __init__(self, shipment_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Shipment '{shipment_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.shipment_id = shipment_id


class TemperatureLogNotFoundError(ColdChainError):
    """No log entry at (shipment_id, sequence)."""
    def __init__(
        self, shipment_id: str, sequence: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Temperature log #{sequence} for shipment '{shipment_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.shipment_id = shipment_id
        self.sequence = sequence


class ShipmentAlreadyExistsError(ColdChainError):
    """create-shipment called with an identifier already registered."""
    def __init__(self, shipment_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Shipment '{shipment_id}' already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.shipment_id = shipment_id


class InvalidRangeError(ColdChainError):
    """min-temp greater than max-temp."""
    def __init__(self, min_temp: int, max_temp: int, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid temperature range: min {min_temp} > max {max_temp}",
            "INVALID_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.min_temp = min_temp
        self.max_temp = max_temp


class InvalidTemperatureError(ColdChainError):
    """Initial temperature outside the shipment's configured bounds."""
    def __init__(
        self, temperature: int, min_temp: int, max_temp: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Temperature {temperature} outside allowed range [{min_temp}, {max_temp}]",
            "INVALID_TEMPERATURE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.temperature = temperature


class AlreadyCompletedError(ColdChainError):
    """Shipment is completed; temperature, handler and status are frozen."""
    def __init__(self, shipment_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Shipment '{shipment_id}' is already completed",
            "ALREADY_COMPLETED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.shipment_id = shipment_id


class NotAuthorizedError(ColdChainError):
    """Caller principal may not perform this operation."""
    def __init__(
        self, principal: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Principal '{principal}' is not authorized to {operation}",
            "NOT_AUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )
        self.principal = principal
        self.operation = operation


class TemperatureBreachError(ColdChainError):
    """Reading outside bounds. Raised after the reading was committed.

    Callers treat this as succeeded-with-warning: the log entry exists at
    `sequence` and the quality penalty has been applied.
    """
    def __init__(
        self,
        shipment_id: str,
        sequence: int,
        temperature: int,
        quality_score: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Temperature breach on shipment '{shipment_id}': "
            f"{temperature} recorded at sequence {sequence}",
            "TEMPERATURE_BREACH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 200,
        )
        self.shipment_id = shipment_id
        self.sequence = sequence
        self.temperature = temperature
        self.quality_score = quality_score


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ColdChainError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class RegistryNotInitializedError(ColdChainError):
    """registry_state row missing — bootstrap has not run."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Shipment registry has not been initialized",
            "REGISTRY_NOT_INITIALIZED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
