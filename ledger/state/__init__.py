"""
ledger.state — owned ledger state, the tables over it, journaling and event sinks.

Submodules:
- balances:   LedgerState (the owned data) and BalanceTable (balances + supply)
- allowances: AllowanceStore (approve / spend policy)
- journal:    undo-log checkpoints giving all-or-nothing operations
- events:     EventSink protocol and in-memory / JSONL / null backends
"""

from __future__ import annotations

from .allowances import AllowanceStore
from .balances import BalanceTable, LedgerState
from .events import EventRecord, EventSink, InMemoryEventSink, JsonlEventSink, NullEventSink
from .journal import Journal

__all__ = [
    "LedgerState",
    "BalanceTable",
    "AllowanceStore",
    "Journal",
    "EventRecord",
    "EventSink",
    "InMemoryEventSink",
    "JsonlEventSink",
    "NullEventSink",
]
