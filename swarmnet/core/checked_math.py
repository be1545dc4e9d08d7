"""Checked u64 Arithmetic — add/mul that abort instead of wrapping.

Invariants:
    - Results are always within 0..U64_MAX, otherwise ArithmeticOverflowError
    - Never saturates, never wraps
    - Division truncates toward zero (operands are non-negative)
"""

from swarmnet.core.domain_types import MAX_STRING_BYTES, REFERRAL_PERCENT, U64_MAX
from swarmnet.core.errors import (
    ArithmeticOverflowError, InvalidStringLengthError, InvalidValueError,
)


def checked_add(a: int, b: int) -> int:
    total = a + b
    if total > U64_MAX:
        raise ArithmeticOverflowError(f"{a} + {b} exceeds u64")
    return total


def checked_mul(a: int, b: int) -> int:
    product = a * b
    if product > U64_MAX:
        raise ArithmeticOverflowError(f"{a} * {b} exceeds u64")
    return product


def referral_bonus(amount: int) -> int:
    """Referral share of a reward: floor(amount * 5 / 100)."""
    return checked_mul(amount, REFERRAL_PERCENT) // 100


def require_u64(name: str, value: int, *, positive: bool = False, maximum: int = U64_MAX) -> int:
    """Reject values outside the unsigned range (and zero when positive=True)."""
    lower = 1 if positive else 0
    if isinstance(value, bool) or not isinstance(value, int) or not lower <= value <= maximum:
        raise InvalidValueError(name, value)
    return value


def require_max_bytes(name: str, value: str, limit: int = MAX_STRING_BYTES) -> str:
    """Length is measured in UTF-8 bytes, not characters."""
    length = len(value.encode("utf-8"))
    if length > limit:
        raise InvalidStringLengthError(name, length, limit)
    return value
