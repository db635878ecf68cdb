"""
ledger — fungible-token ledger: balances, allowances, transfer/mint/burn.

Common symbols are lazily re-exported from their submodules on first access so
that importing the package (e.g. for `ledger.version`) stays cheap.

    from ledger import Ledger, ZERO_ADDRESS

    led = Ledger()
    led._mint(alice, 1000)
    led.transfer(alice, bob, 400)
"""

from __future__ import annotations

from importlib import import_module as _imp
from typing import Any, Dict, Tuple

from .version import __version__, git_describe

# Map of public attributes → (submodule, symbol)
_exports: Dict[str, Tuple[str, str]] = {
    # Core
    "Ledger": ("token", "Ledger"),
    "LedgerState": ("state.balances", "LedgerState"),
    "AllowanceStore": ("state.allowances", "AllowanceStore"),
    "BalanceTable": ("state.balances", "BalanceTable"),
    "Journal": ("state.journal", "Journal"),
    # Domain
    "ZERO_ADDRESS": ("types.address", "ZERO_ADDRESS"),
    "to_address": ("types.address", "to_address"),
    "U256_MAX": ("types.amount", "U256_MAX"),
    # Events
    "InMemoryEventSink": ("state.events", "InMemoryEventSink"),
    "JsonlEventSink": ("state.events", "JsonlEventSink"),
    "NullEventSink": ("state.events", "NullEventSink"),
    # Errors
    "LedgerError": ("errors", "LedgerError"),
    # Config
    "get_config": ("config", "get_config"),
    "load_config": ("config", "load_config"),
}

__all__ = tuple(["__version__", "git_describe", *_exports.keys()])


def __getattr__(name: str) -> Any:
    if name in _exports:
        submod, symbol = _exports[name]
        mod = _imp(f"{__name__}.{submod}")
        return getattr(mod, symbol)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover
    return sorted(list(globals().keys()) + list(__all__))
