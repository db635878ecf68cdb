"""
ledger.state.allowances — delegated-spending authorizations.

Tracks, per (owner, spender), the amount the spender may move out of the
owner's balance. Two write paths exist and they differ only in signalling:

- `approve(owner, spender, value, emit_event=True)` — explicit overwrite;
  emits Approval when `emit_event` is set (the public approve always does).
- `spend(owner, spender, value)` — consumption by a delegated transfer;
  decrements through `approve(..., emit_event=False)` so spending never
  produces Approval events.

The maximum value of the configured integer width is the infinite-allowance
sentinel: spending against it is a no-op and never fails.
"""

from __future__ import annotations

from typing import Tuple

from ..errors import InsufficientAllowance, InvalidApprover, InvalidSpender
from ..types.address import is_zero
from ..types.events import Approval
from .balances import LedgerState
from .journal import Journal


class AllowanceStore:
    def __init__(self, state: LedgerState, journal: Journal, *, infinite: int) -> None:
        self._state = state
        self._journal = journal
        self.infinite = infinite

    def get(self, owner: bytes, spender: bytes) -> int:
        return self._state.allowances.get((owner, spender), 0)

    def is_infinite(self, value: int) -> bool:
        return value == self.infinite

    def approve(self, owner: bytes, spender: bytes, value: int, emit_event: bool = True) -> None:
        """
        Set allowance(owner, spender) = value unconditionally (not additive).

        Raises:
            InvalidApprover if owner is the zero address.
            InvalidSpender  if spender is the zero address.
        """
        if is_zero(owner):
            raise InvalidApprover(owner)
        if is_zero(spender):
            raise InvalidSpender(spender)
        key: Tuple[bytes, bytes] = (owner, spender)
        self._journal.record_item(self._state.allowances, key)
        self._state.allowances[key] = value
        if emit_event:
            self._journal.emit(Approval(owner=owner, spender=spender, value=value))

    def spend(self, owner: bytes, spender: bytes, value: int) -> None:
        """
        Consume `value` of allowance(owner, spender).

        Infinite allowances are left untouched. Raises InsufficientAllowance
        when a finite allowance is below `value`.
        """
        current = self.get(owner, spender)
        if self.is_infinite(current):
            return
        if current < value:
            raise InsufficientAllowance(spender, current, value)
        self.approve(owner, spender, current - value, emit_event=False)


__all__ = ["AllowanceStore"]
