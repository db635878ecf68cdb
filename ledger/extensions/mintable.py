"""
ledger.extensions.mintable — owner-gated public minting.
"""

from __future__ import annotations

from ..token import operation
from ..types.address import AddressLike
from .ownable import OwnableLedger


class MintableLedger(OwnableLedger):
    @operation("mint")
    def mint(self, caller: AddressLike, to: AddressLike, value: int) -> bool:
        """Create `value` new units for `to`. Only the owner may mint."""
        self._require_owner(caller)
        self._mint(to, value)
        return True


__all__ = ["MintableLedger"]
