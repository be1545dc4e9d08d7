"""Error Hierarchy — typed, categorized exceptions for every SwarmNet failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) abort the operation with no observable state change
    - Infrastructure errors (5xx) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SwarmNetError base: FastAPI global handler catches all
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    ARITHMETIC = "arithmetic"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    identity: str | None = None
    debug_info: dict[str, Any] | None = None


class SwarmNetError(Exception):
    """Base exception for all SwarmNet errors."""

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
                    "operation": self.context.operation,
                    "identity": self.context.identity,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class InvalidStringLengthError(SwarmNetError):
    """String field exceeds the byte limit."""
    def __init__(
        self, field_name: str, length: int, limit: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{field_name} is {length} bytes; maximum is {limit}",
            "INVALID_STRING_LENGTH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field_name = field_name


class InvalidValueError(SwarmNetError):
    """Numeric input outside its allowed range."""
    def __init__(
        self, field_name: str, value: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{field_name}={value} is out of range",
            "INVALID_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field_name = field_name


class TokenAccountMismatchError(SwarmNetError):
    """Token account has the wrong owner or mint for this operation."""
    def __init__(self, address: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token account '{address}' rejected: {reason}",
            "TOKEN_ACCOUNT_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.address = address


# ─── Business Rule Errors (400/409) ─────────────────────────────

class InvalidStakePoolError(SwarmNetError):
    """Stake pool reference differs from the one bound at bootstrap."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid stake pool account '{address}'",
            "INVALID_STAKE_POOL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidRewardPoolError(SwarmNetError):
    """Reward pool reference differs from the one bound at bootstrap."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid reward pool account '{address}'",
            "INVALID_REWARD_POOL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class NoRewardsToClaimError(SwarmNetError):
    """Referral balance is zero."""
    def __init__(self, owner: str, context: ErrorContext | None = None):
        super().__init__(
            f"No referral rewards available to claim for '{owner}'",
            "NO_REWARDS_TO_CLAIM", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InsufficientFundsError(SwarmNetError):
    """Source token account cannot cover the transfer."""
    def __init__(
        self, address: str, balance: int, amount: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Token account '{address}' holds {balance}, transfer needs {amount}",
            "INSUFFICIENT_FUNDS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class DeviceInactiveError(SwarmNetError):
    """Task assignment targeted an inactive device."""
    def __init__(self, owner: str, context: ErrorContext | None = None):
        super().__init__(
            f"Device '{owner}' is not active",
            "DEVICE_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InsufficientCapabilityError(SwarmNetError):
    """Device does not meet the task requirements."""
    def __init__(self, owner: str, shortfalls: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Device '{owner}' does not meet requirements: {', '.join(shortfalls)}",
            "INSUFFICIENT_CAPABILITY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.shortfalls = shortfalls


class AlreadyInitializedError(SwarmNetError):
    """Global registry already exists."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Global registry is already initialized",
            "ALREADY_INITIALIZED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadyRegisteredError(SwarmNetError):
    """A device already exists for this owner."""
    def __init__(self, owner: str, context: ErrorContext | None = None):
        super().__init__(
            f"Device already registered for '{owner}'",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadyExistsError(SwarmNetError):
    """A task already exists for this (owner, task_id) pair."""
    def __init__(self, owner: str, task_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Task '{task_id}' already exists for '{owner}'",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class ConflictError(SwarmNetError):
    """Transition attempted from an unexpected prior state, or concurrent write."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Authorization / Lookup / Arithmetic ────────────────────────

class UnauthorizedError(SwarmNetError):
    """Caller identity does not match the required owner or admin (401 when absent)."""
    def __init__(
        self, message: str, context: ErrorContext | None = None, http_status: int = 403,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, http_status,
        )


class ResourceNotFoundError(SwarmNetError):
    """Referenced record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class NotInitializedError(SwarmNetError):
    """Operation needs the global registry, which has not been created yet."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Global registry is not initialized",
            "NOT_INITIALIZED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class ArithmeticOverflowError(SwarmNetError):
    """Checked u64 arithmetic would overflow."""
    def __init__(self, expression: str, context: ErrorContext | None = None):
        super().__init__(
            f"Arithmetic overflow: {expression}",
            "ARITHMETIC_OVERFLOW", ErrorCategory.ARITHMETIC,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Infrastructure Errors (5xx) ────────────────────────────────

class DatabaseError(SwarmNetError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
