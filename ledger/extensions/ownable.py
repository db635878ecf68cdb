"""
ledger.extensions.ownable — single-owner access control for ledger variants.

- `owner()` reads the current owner (the zero address once renounced)
- `_require_owner(caller)` raises Unauthorized for anyone else
- `transfer_ownership(caller, new_owner)` rejects the zero address; use
  `renounce_ownership(caller)` to leave the ledger without an owner
- Every change emits OwnershipTransferred(previous_owner, new_owner)
"""

from __future__ import annotations

from typing import Any

from ..errors import InvalidAddress, Unauthorized
from ..token import Ledger, operation
from ..types.address import AddressLike, is_zero
from ..types.events import OwnershipTransferred


class OwnableLedger(Ledger):
    def __init__(self, *, owner: AddressLike, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        initial = self._addr(owner)
        if is_zero(initial):
            raise InvalidAddress("initial owner must not be the zero address", address=initial)
        self._owner = self.zero_address
        self._set_owner(initial)

    def owner(self) -> bytes:
        return self._owner

    def _require_owner(self, caller: AddressLike) -> bytes:
        who = self._addr(caller)
        if is_zero(self._owner) or who != self._owner:
            raise Unauthorized(who)
        return who

    def _set_owner(self, new_owner: bytes) -> None:
        previous = self._owner
        self._journal.record_attr(self, "_owner")
        self._owner = new_owner
        self._emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

    @operation("transfer_ownership")
    def transfer_ownership(self, caller: AddressLike, new_owner: AddressLike) -> bool:
        self._require_owner(caller)
        target = self._addr(new_owner)
        if is_zero(target):
            raise InvalidAddress("new owner must not be the zero address", address=target)
        self._set_owner(target)
        return True

    @operation("renounce_ownership")
    def renounce_ownership(self, caller: AddressLike) -> bool:
        self._require_owner(caller)
        self._set_owner(self.zero_address)
        return True


__all__ = ["OwnableLedger"]
