"""
ledger.types.events — observability records emitted by ledger operations.

Events are append-only signals for external indexers; the ledger never reads
them back. Each record is a frozen dataclass with a stable `name` and a
JSON-friendly `to_dict()` (addresses rendered as 0x-hex, integers kept as
ints so 256-bit values survive a JSON round trip).

Conventions
-----------
* `Transfer(sender, recipient, value)` for every balance movement; mints have
  the zero address as sender, burns have it as recipient.
* `Approval(owner, spender, value)` for every explicit approval, never for
  allowance decrements caused by spending.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Tuple


def _render(v: Any) -> Any:
    if isinstance(v, bytes):
        return "0x" + v.hex()
    return v


@dataclass(frozen=True)
class LedgerEvent:
    """Base record. Subclasses set `name` and declare their fields."""

    name: ClassVar[str] = "Event"

    def addresses(self) -> Tuple[bytes, ...]:
        """All address-typed fields, used by sinks for address filtering."""
        return tuple(getattr(self, f.name) for f in fields(self) if isinstance(getattr(self, f.name), bytes))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"event": self.name}
        for f in fields(self):
            out[f.name] = _render(getattr(self, f.name))
        return out


@dataclass(frozen=True)
class Transfer(LedgerEvent):
    name: ClassVar[str] = "Transfer"

    sender: bytes
    recipient: bytes
    value: int


@dataclass(frozen=True)
class Approval(LedgerEvent):
    name: ClassVar[str] = "Approval"

    owner: bytes
    spender: bytes
    value: int


@dataclass(frozen=True)
class OwnershipTransferred(LedgerEvent):
    name: ClassVar[str] = "OwnershipTransferred"

    previous_owner: bytes
    new_owner: bytes


@dataclass(frozen=True)
class Paused(LedgerEvent):
    name: ClassVar[str] = "Paused"

    account: bytes


@dataclass(frozen=True)
class Unpaused(LedgerEvent):
    name: ClassVar[str] = "Unpaused"

    account: bytes


__all__ = [
    "LedgerEvent",
    "Transfer",
    "Approval",
    "OwnershipTransferred",
    "Paused",
    "Unpaused",
]
