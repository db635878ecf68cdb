from __future__ import annotations

import pytest

from ledger.config import LedgerConfig, load_config
from ledger.state.events import InMemoryEventSink
from ledger.token import Ledger


@pytest.fixture
def config() -> LedgerConfig:
    """Defaults only: ignores the caller's LEDGER_* environment, metrics off."""
    return load_config(env={}, overrides={"metrics_enabled": False})


@pytest.fixture
def sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def ledger(config: LedgerConfig, sink: InMemoryEventSink) -> Ledger:
    return Ledger(config=config, sink=sink)
