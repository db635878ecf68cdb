"""
ledger.types — value types shared by the ledger layers (addresses, amounts, events).
"""

from __future__ import annotations

from .address import ZERO_ADDRESS, AddressLike, is_zero, to_address, to_hex, zero_address
from .amount import U256_MAX, checked_add, checked_sub, ensure_amount, is_uint, uint_max
from .events import Approval, LedgerEvent, OwnershipTransferred, Paused, Transfer, Unpaused

__all__ = [
    "AddressLike",
    "ZERO_ADDRESS",
    "zero_address",
    "to_address",
    "to_hex",
    "is_zero",
    "U256_MAX",
    "uint_max",
    "is_uint",
    "ensure_amount",
    "checked_add",
    "checked_sub",
    "LedgerEvent",
    "Transfer",
    "Approval",
    "OwnershipTransferred",
    "Paused",
    "Unpaused",
]
