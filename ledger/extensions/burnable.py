"""
ledger.extensions.burnable — holders destroy their own units, or units they
have been approved to spend.

`burn_from` consumes allowance exactly like `transfer_from`: infinite
allowances are untouched and the decrement emits no Approval.
"""

from __future__ import annotations

from ..token import Ledger, operation
from ..types.address import AddressLike


class BurnableLedger(Ledger):
    @operation("burn")
    def burn(self, caller: AddressLike, value: int) -> bool:
        self._burn(caller, value)
        return True

    @operation("burn_from")
    def burn_from(self, caller: AddressLike, account: AddressLike, value: int) -> bool:
        self._spend_allowance(account, caller, value)
        self._burn(account, value)
        return True


__all__ = ["BurnableLedger"]
