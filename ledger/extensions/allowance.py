"""
ledger.extensions.allowance — relative allowance changes.

`approve` overwrites, which lets a spender front-run a change from N to M and
spend N + M. These helpers adjust the current value instead:

- increase_allowance(caller, spender, added)
- decrease_allowance(caller, spender, subtracted)

Both emit Approval with the resulting value. Decreasing below zero raises
InsufficientAllowance; increasing past the integer width raises
ArithmeticOverflow.
"""

from __future__ import annotations

from ..errors import InsufficientAllowance
from ..token import Ledger, operation
from ..types.address import AddressLike
from ..types.amount import checked_add


class AllowanceAdjustLedger(Ledger):
    @operation("increase_allowance")
    def increase_allowance(self, caller: AddressLike, spender: AddressLike, added: int) -> bool:
        owner, sp, added = self._addr(caller), self._addr(spender), self._amount(added)
        current = self._allowances.get(owner, sp)
        self._approve(owner, sp, checked_add(current, added, cap=self.max_value))
        return True

    @operation("decrease_allowance")
    def decrease_allowance(self, caller: AddressLike, spender: AddressLike, subtracted: int) -> bool:
        owner, sp, subtracted = self._addr(caller), self._addr(spender), self._amount(subtracted)
        current = self._allowances.get(owner, sp)
        if current < subtracted:
            raise InsufficientAllowance(sp, current, subtracted)
        self._approve(owner, sp, current - subtracted)
        return True


__all__ = ["AllowanceAdjustLedger"]
