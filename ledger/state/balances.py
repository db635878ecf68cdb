"""
ledger.state.balances — the owned ledger state and the balance table over it.

`LedgerState` is the explicit, owned data structure behind one ledger: two
mappings plus the supply scalar. Nothing in this package keeps ambient or
module-level state; a ledger is exactly the `LedgerState` it was given.

`BalanceTable` is the only writer of `balances` and `total_supply`. Every
write goes through the journal so an enclosing checkpoint can undo it.
Absent entries read as zero; entries are never deleted by ledger operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from .journal import Journal


@dataclass
class LedgerState:
    """
    Invariant (maintained by the ledger, checked by `conserved()`):
        total_supply == sum(balances.values())
    """

    balances: Dict[bytes, int] = field(default_factory=dict)
    allowances: Dict[Tuple[bytes, bytes], int] = field(default_factory=dict)
    total_supply: int = 0

    def conserved(self) -> bool:
        return self.total_supply == sum(self.balances.values())

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_supply": self.total_supply,
            "balances": {"0x" + a.hex(): v for a, v in sorted(self.balances.items())},
            "allowances": {
                f"0x{o.hex()}:0x{s.hex()}": v for (o, s), v in sorted(self.allowances.items())
            },
        }


class BalanceTable:
    def __init__(self, state: LedgerState, journal: Journal) -> None:
        self._state = state
        self._journal = journal

    def get(self, account: bytes) -> int:
        return self._state.balances.get(account, 0)

    def set(self, account: bytes, value: int) -> None:
        self._journal.record_item(self._state.balances, account)
        self._state.balances[account] = value

    @property
    def total_supply(self) -> int:
        return self._state.total_supply

    def set_total_supply(self, value: int) -> None:
        self._journal.record_attr(self._state, "total_supply")
        self._state.total_supply = value

    def accounts(self) -> Iterator[Tuple[bytes, int]]:
        """(account, balance) pairs for every account ever touched."""
        return iter(sorted(self._state.balances.items()))

    def __len__(self) -> int:
        return len(self._state.balances)


__all__ = ["LedgerState", "BalanceTable"]
