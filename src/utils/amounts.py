"""
Checked u64 arithmetic for token supply counters.
Results that leave the unsigned 64-bit range are reported, never wrapped.
"""

from typing import Optional

U64_MAX = 2**64 - 1


def is_valid_u64(value) -> bool:
    """Validate that value is an integer representable as u64"""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= U64_MAX


def _require_u64(value) -> int:
    if not is_valid_u64(value):
        raise ValueError(f"Invalid u64 amount: {value!r}")
    return value


def checked_add(a: int, b: int) -> Optional[int]:
    """Add two u64 values, None on overflow

    Raises:
        ValueError: If either operand is not a u64
    """
    result = _require_u64(a) + _require_u64(b)
    if result > U64_MAX:
        return None
    return result


def checked_sub(a: int, b: int) -> Optional[int]:
    """Subtract two u64 values, None on underflow

    Raises:
        ValueError: If either operand is not a u64
    """
    result = _require_u64(a) - _require_u64(b)
    if result < 0:
        return None
    return result
