"""
ledger.types.amount — bounded unsigned-integer amounts and checked arithmetic.

Balances, allowances and supply are non-negative integers bounded by a fixed
width (256 bits by default). Python ints are unbounded, so the width is
enforced explicitly: values outside the range are rejected, never wrapped.

Exports
-------
* Constants: `U256_MAX`, `DEFAULT_UINT_BITS`
* `uint_max(bits)`             → maximum value for a width
* `is_uint(n, cap=...)`        → range check
* `ensure_amount(n, cap=...)`  → validate an incoming amount
* `checked_add(a, b, cap=...)` → raises ArithmeticOverflow past `cap`
* `checked_sub(a, b)`          → raises ArithmeticOverflow below zero
"""

from __future__ import annotations

from ..errors import ArithmeticOverflow, InvalidAmount

DEFAULT_UINT_BITS: int = 256

U256_MAX: int = (1 << 256) - 1
"""Maximum 256-bit unsigned integer; the default infinite-allowance sentinel."""


def uint_max(bits: int = DEFAULT_UINT_BITS) -> int:
    """Return 2**bits - 1. `bits` must be a positive multiple of 8."""
    if bits <= 0 or bits % 8:
        raise ValueError(f"bits must be a positive multiple of 8, got {bits}")
    return (1 << bits) - 1


def is_uint(n: int, *, cap: int = U256_MAX) -> bool:
    """Return True iff 0 <= n <= cap. Booleans are not amounts."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= cap


def ensure_amount(n: int, *, cap: int = U256_MAX) -> int:
    """
    Validate an amount supplied by a caller.

    Raises:
        InvalidAmount       if `n` is not an int or is negative.
        ArithmeticOverflow  if `n` does not fit the width.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidAmount("amount must be an int", value=n)
    if n < 0:
        raise InvalidAmount("amount must be non-negative", value=n)
    if n > cap:
        raise ArithmeticOverflow("amount exceeds integer width", value=n, limit=cap)
    return n


def checked_add(a: int, b: int, *, cap: int = U256_MAX) -> int:
    s = a + b
    if s > cap:
        raise ArithmeticOverflow(f"addition overflow: {a} + {b}", value=s, limit=cap)
    return s


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticOverflow(f"subtraction underflow: {a} - {b}", value=a - b, limit=0)
    return a - b


__all__ = [
    "DEFAULT_UINT_BITS",
    "U256_MAX",
    "uint_max",
    "is_uint",
    "ensure_amount",
    "checked_add",
    "checked_sub",
]
