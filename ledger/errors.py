"""
ledger.errors — typed failures of ledger operations.

Every failure is a synchronous, terminal rejection of one operation. Errors
carry a stable machine `code` and the offending operands in `data` (kept
JSON-serializable, addresses as 0x-hex) so that callers can surface them
without parsing messages.

Hierarchy
---------
LedgerError (base)
 ├─ InvalidAddress          : malformed address (type, width, hex)
 ├─ InvalidAmount           : amount is not a non-negative int
 ├─ ArithmeticOverflow      : value or supply exceeds the integer width
 ├─ InvalidSender           : zero address used as a sender
 ├─ InvalidReceiver         : zero address used as a receiver
 ├─ InvalidApprover         : zero address used as an approval owner
 ├─ InvalidSpender          : zero address used as an approval spender
 ├─ InsufficientBalance     : balance(from) < value
 ├─ InsufficientAllowance   : finite allowance < value
 ├─ SupplyCapExceeded       : mint would push supply above the cap
 ├─ EnforcedPause           : state change while paused
 ├─ ExpectedPause           : unpause while not paused
 ├─ Unauthorized            : owner-gated call from a non-owner
 └─ InvalidMetadata         : bad name / symbol / decimals

None of these import other ledger modules so they can be raised from the
lowest layers (types, journal) without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _hex(addr: Any) -> Any:
    if isinstance(addr, (bytes, bytearray, memoryview)):
        return "0x" + bytes(addr).hex()
    return addr


@dataclass
class LedgerError(Exception):
    """
    Base ledger error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g. 'INSUFFICIENT_BALANCE').
        data:    Optional structured details (JSON-serializable).
    """

    message: str = "ledger error"
    code: str = "LEDGER_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for logs/CLI output."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


def _fields(**kw: Any) -> Optional[Dict[str, Any]]:
    d = {k: _hex(v) for k, v in kw.items() if v is not None}
    return d or None


class InvalidAddress(LedgerError):
    def __init__(self, message: str = "invalid address", *, address: Any = None):
        shown = address if isinstance(address, (str, bytes, bytearray)) else repr(address)
        super().__init__(message=message, code="INVALID_ADDRESS", data=_fields(address=shown))


class InvalidAmount(LedgerError):
    def __init__(self, message: str = "invalid amount", *, value: Any = None):
        super().__init__(message=message, code="INVALID_AMOUNT", data=_fields(value=repr(value)))


class ArithmeticOverflow(LedgerError):
    """
    A value would leave the configured unsigned-integer range.

    Raised on the mint path when total supply would exceed the width, and at
    the boundary when a caller passes an amount that does not fit.
    """

    def __init__(
        self,
        message: str = "arithmetic overflow",
        *,
        value: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            code="ARITHMETIC_OVERFLOW",
            data=_fields(value=value, limit=limit),
        )


class InvalidSender(LedgerError):
    def __init__(self, sender: Any, message: str = "invalid sender"):
        super().__init__(message=message, code="INVALID_SENDER", data=_fields(sender=sender))


class InvalidReceiver(LedgerError):
    def __init__(self, receiver: Any, message: str = "invalid receiver"):
        super().__init__(message=message, code="INVALID_RECEIVER", data=_fields(receiver=receiver))


class InvalidApprover(LedgerError):
    def __init__(self, approver: Any, message: str = "invalid approver"):
        super().__init__(message=message, code="INVALID_APPROVER", data=_fields(approver=approver))


class InvalidSpender(LedgerError):
    def __init__(self, spender: Any, message: str = "invalid spender"):
        super().__init__(message=message, code="INVALID_SPENDER", data=_fields(spender=spender))


class InsufficientBalance(LedgerError):
    """Raised when an account cannot cover the requested amount."""

    def __init__(self, sender: Any, balance: int, needed: int):
        super().__init__(
            message="insufficient balance",
            code="INSUFFICIENT_BALANCE",
            data=_fields(sender=sender, balance=balance, needed=needed),
        )
        self.sender = sender
        self.balance = balance
        self.needed = needed


class InsufficientAllowance(LedgerError):
    """Raised when a finite allowance cannot cover the requested amount."""

    def __init__(self, spender: Any, allowance: int, needed: int):
        super().__init__(
            message="insufficient allowance",
            code="INSUFFICIENT_ALLOWANCE",
            data=_fields(spender=spender, allowance=allowance, needed=needed),
        )
        self.spender = spender
        self.allowance = allowance
        self.needed = needed


class SupplyCapExceeded(LedgerError):
    def __init__(self, increased_supply: int, cap: int):
        super().__init__(
            message="supply cap exceeded",
            code="SUPPLY_CAP_EXCEEDED",
            data=_fields(increased_supply=increased_supply, cap=cap),
        )


class EnforcedPause(LedgerError):
    def __init__(self, message: str = "ledger is paused"):
        super().__init__(message=message, code="ENFORCED_PAUSE")


class ExpectedPause(LedgerError):
    def __init__(self, message: str = "ledger is not paused"):
        super().__init__(message=message, code="EXPECTED_PAUSE")


class Unauthorized(LedgerError):
    def __init__(self, account: Any, message: str = "caller is not the owner"):
        super().__init__(message=message, code="UNAUTHORIZED", data=_fields(account=account))


class InvalidMetadata(LedgerError):
    def __init__(self, message: str = "invalid metadata", *, field_name: Optional[str] = None):
        super().__init__(message=message, code="INVALID_METADATA", data=_fields(field=field_name))


# -------- helper utilities ---------------------------------------------------


_INPUT_CODES = frozenset({"INVALID_ADDRESS", "INVALID_AMOUNT", "INVALID_METADATA"})


def error_to_result_fields(err: LedgerError) -> Dict[str, Any]:
    """
    Map a LedgerError to canonical result fields.

    Returns:
        {
          "status": "INVALID_INPUT" | "REJECTED",
          "error":  {code, message, data?}
        }
    """
    status = "INVALID_INPUT" if err.code in _INPUT_CODES else "REJECTED"
    return {"status": status, "error": err.to_dict()}


__all__ = [
    "LedgerError",
    "InvalidAddress",
    "InvalidAmount",
    "ArithmeticOverflow",
    "InvalidSender",
    "InvalidReceiver",
    "InvalidApprover",
    "InvalidSpender",
    "InsufficientBalance",
    "InsufficientAllowance",
    "SupplyCapExceeded",
    "EnforcedPause",
    "ExpectedPause",
    "Unauthorized",
    "InvalidMetadata",
    "error_to_result_fields",
]
