"""
ledger.extensions.pausable — global pause switch over balance movements.

- The paused flag is global to the ledger (single boolean).
- Changing it requires the owner; pausing a paused ledger raises
  EnforcedPause, unpausing a running one raises ExpectedPause.
- While paused every `_update` (transfer, mint, burn) raises EnforcedPause.
  Approvals keep working.
- Events (on change only): Paused(account), Unpaused(account).
"""

from __future__ import annotations

from typing import Any

from ..errors import EnforcedPause, ExpectedPause
from ..token import operation
from ..types.address import AddressLike
from ..types.events import Paused, Unpaused
from .ownable import OwnableLedger


class PausableLedger(OwnableLedger):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._paused = False

    def paused(self) -> bool:
        return self._paused

    def _require_not_paused(self) -> None:
        if self._paused:
            raise EnforcedPause()

    def _require_paused(self) -> None:
        if not self._paused:
            raise ExpectedPause()

    def _set_paused(self, flag: bool) -> None:
        self._journal.record_attr(self, "_paused")
        self._paused = flag

    @operation("pause")
    def pause(self, caller: AddressLike) -> bool:
        who = self._require_owner(caller)
        self._require_not_paused()
        self._set_paused(True)
        self._emit(Paused(account=who))
        return True

    @operation("unpause")
    def unpause(self, caller: AddressLike) -> bool:
        who = self._require_owner(caller)
        self._require_paused()
        self._set_paused(False)
        self._emit(Unpaused(account=who))
        return True

    def _update(self, sender: bytes, recipient: bytes, value: int) -> None:
        self._require_not_paused()
        super()._update(sender, recipient, value)


__all__ = ["PausableLedger"]
