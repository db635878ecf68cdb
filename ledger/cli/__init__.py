"""
ledger.cli — command-line tools.

    python -m ledger.cli.replay run ops.jsonl
"""

from __future__ import annotations

from .replay import app

__all__ = ["app"]
