"""
ledger.extensions.capped — hard upper bound on total supply.

The cap is enforced by wrapping `_update`: after a mint has been applied, a
supply above the cap raises SupplyCapExceeded and the enclosing checkpoint
rolls the mint back.
"""

from __future__ import annotations

from typing import Any

from ..errors import SupplyCapExceeded
from ..token import Ledger
from ..types.address import is_zero


class CappedLedger(Ledger):
    def __init__(self, *, cap: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if isinstance(cap, bool) or not isinstance(cap, int) or cap <= 0:
            raise ValueError("cap must be a positive int")
        if cap > self.max_value:
            raise ValueError("cap exceeds the integer width")
        self._cap = cap

    @property
    def cap(self) -> int:
        return self._cap

    def _update(self, sender: bytes, recipient: bytes, value: int) -> None:
        super()._update(sender, recipient, value)
        if is_zero(sender):
            supply = self.total_supply()
            if supply > self._cap:
                raise SupplyCapExceeded(supply, self._cap)


__all__ = ["CappedLedger"]
