from __future__ import annotations

import pytest

from ledger.config import load_config
from ledger.errors import ArithmeticOverflow, InsufficientBalance, InvalidReceiver, InvalidSender
from ledger.state.events import InMemoryEventSink
from ledger.token import Ledger
from ledger.types.address import ZERO_ADDRESS
from ledger.types.events import Transfer

ALICE = b"\xaa" * 20
BOB = b"\xbb" * 20


def test_mint_creates_supply_and_emits(ledger: Ledger, sink: InMemoryEventSink) -> None:
    ledger._mint(ALICE, 1000)

    assert ledger.balance_of(ALICE) == 1000
    assert ledger.total_supply() == 1000
    assert sink.events == [Transfer(sender=ZERO_ADDRESS, recipient=ALICE, value=1000)]


def test_mint_accumulates(ledger: Ledger) -> None:
    ledger._mint(ALICE, 1)
    ledger._mint(ALICE, 2)
    ledger._mint(BOB, 3)
    assert ledger.balance_of(ALICE) == 3
    assert ledger.total_supply() == 6
    assert ledger.state.conserved()


def test_mint_to_zero_address_rejected(ledger: Ledger, sink: InMemoryEventSink) -> None:
    with pytest.raises(InvalidReceiver):
        ledger._mint(ZERO_ADDRESS, 5)
    assert ledger.total_supply() == 0
    assert len(sink) == 0


def test_burn_destroys_supply_and_emits(ledger: Ledger, sink: InMemoryEventSink) -> None:
    ledger._mint(ALICE, 1000)
    sink.clear()

    ledger._burn(ALICE, 400)

    assert ledger.balance_of(ALICE) == 600
    assert ledger.total_supply() == 600
    assert sink.events == [Transfer(sender=ALICE, recipient=ZERO_ADDRESS, value=400)]


def test_burn_more_than_balance(ledger: Ledger) -> None:
    ledger._mint(ALICE, 10)
    with pytest.raises(InsufficientBalance) as exc:
        ledger._burn(ALICE, 11)
    assert exc.value.balance == 10
    assert ledger.total_supply() == 10


def test_burn_from_zero_address_rejected(ledger: Ledger) -> None:
    with pytest.raises(InvalidSender):
        ledger._burn(ZERO_ADDRESS, 0)


def test_mint_up_to_max_then_overflow(ledger: Ledger, sink: InMemoryEventSink) -> None:
    ledger._mint(ALICE, ledger.max_value)
    assert ledger.total_supply() == ledger.max_value
    sink.clear()

    with pytest.raises(ArithmeticOverflow) as exc:
        ledger._mint(BOB, 1)

    assert exc.value.code == "ARITHMETIC_OVERFLOW"
    assert ledger.total_supply() == ledger.max_value
    assert ledger.balance_of(BOB) == 0
    assert len(sink) == 0


def test_narrow_width_bounds_amounts_and_supply() -> None:
    cfg = load_config(env={}, overrides={"uint_bits": 8, "metrics_enabled": False})
    led = Ledger(config=cfg, sink=InMemoryEventSink())
    assert led.max_value == 255

    led._mint(ALICE, 200)
    with pytest.raises(ArithmeticOverflow):
        led._mint(BOB, 56)
    with pytest.raises(ArithmeticOverflow):
        led.transfer(ALICE, BOB, 256)

    led._mint(BOB, 55)
    assert led.total_supply() == 255
    led.transfer(BOB, ALICE, 55)
    assert led.balance_of(ALICE) == 255


def test_narrow_address_width() -> None:
    cfg = load_config(env={}, overrides={"address_bytes": 4, "metrics_enabled": False})
    led = Ledger(config=cfg, sink=InMemoryEventSink())
    led._mint("0x01020304", 9)
    assert led.balance_of(b"\x01\x02\x03\x04") == 9
    assert led.zero_address == b"\x00" * 4


def test_balances_persist_when_emptied(ledger: Ledger) -> None:
    ledger._mint(ALICE, 5)
    ledger._burn(ALICE, 5)
    assert ledger.balance_of(ALICE) == 0
    assert ALICE in ledger.state.balances
