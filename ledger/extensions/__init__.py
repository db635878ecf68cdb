"""
ledger.extensions — composable ledger variants.

Each variant is a `Ledger` subclass that cooperates through `super()`, so they
stack by multiple inheritance:

    class GovernedToken(PausableLedger, MintableLedger, CappedLedger, BurnableLedger):
        pass

    tok = GovernedToken(owner=admin, cap=10**24)

Variants that change movement rules (caps, pausing) wrap `_update`; none of
them touch balances directly.
"""

from __future__ import annotations

from .allowance import AllowanceAdjustLedger
from .burnable import BurnableLedger
from .capped import CappedLedger
from .mintable import MintableLedger
from .ownable import OwnableLedger
from .pausable import PausableLedger

__all__ = [
    "AllowanceAdjustLedger",
    "BurnableLedger",
    "CappedLedger",
    "MintableLedger",
    "OwnableLedger",
    "PausableLedger",
]
