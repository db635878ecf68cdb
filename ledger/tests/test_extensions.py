from __future__ import annotations

import pytest

from ledger.config import LedgerConfig
from ledger.errors import (ArithmeticOverflow, EnforcedPause, ExpectedPause, InsufficientAllowance,
                           InvalidAddress, SupplyCapExceeded, Unauthorized)
from ledger.extensions import (AllowanceAdjustLedger, BurnableLedger, CappedLedger, MintableLedger,
                               OwnableLedger, PausableLedger)
from ledger.state.events import InMemoryEventSink
from ledger.types.address import ZERO_ADDRESS
from ledger.types.events import Approval, OwnershipTransferred, Paused, Transfer, Unpaused

ADMIN = b"\xad" * 20
ALICE = b"\xaa" * 20
BOB = b"\xbb" * 20


class GovernedToken(PausableLedger, MintableLedger, CappedLedger, BurnableLedger):
    pass


# ---- Ownable ----


def test_ownable_emits_initial_transfer(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = OwnableLedger(owner=ADMIN, config=config, sink=sink)
    assert led.owner() == ADMIN
    assert sink.events == [OwnershipTransferred(previous_owner=ZERO_ADDRESS, new_owner=ADMIN)]


def test_ownable_rejects_zero_initial_owner(config: LedgerConfig) -> None:
    with pytest.raises(InvalidAddress):
        OwnableLedger(owner=ZERO_ADDRESS, config=config)


def test_transfer_and_renounce_ownership(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = OwnableLedger(owner=ADMIN, config=config, sink=sink)
    sink.clear()

    with pytest.raises(Unauthorized):
        led.transfer_ownership(ALICE, ALICE)
    with pytest.raises(InvalidAddress):
        led.transfer_ownership(ADMIN, ZERO_ADDRESS)
    assert led.owner() == ADMIN

    led.transfer_ownership(ADMIN, ALICE)
    led.renounce_ownership(ALICE)

    assert led.owner() == ZERO_ADDRESS
    assert sink.events == [
        OwnershipTransferred(previous_owner=ADMIN, new_owner=ALICE),
        OwnershipTransferred(previous_owner=ALICE, new_owner=ZERO_ADDRESS),
    ]
    with pytest.raises(Unauthorized):
        led.transfer_ownership(ZERO_ADDRESS, BOB)


# ---- Mintable / Burnable ----


def test_mint_is_owner_only(config: LedgerConfig) -> None:
    led = MintableLedger(owner=ADMIN, config=config)
    assert led.mint(ADMIN, ALICE, 50) is True
    with pytest.raises(Unauthorized) as exc:
        led.mint(ALICE, ALICE, 50)
    assert exc.value.to_dict()["data"] == {"account": "0x" + "aa" * 20}
    assert led.total_supply() == 50


def test_burn_and_burn_from(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = BurnableLedger(config=config, sink=sink)
    led._mint(ALICE, 100)
    led.approve(ALICE, BOB, 30)
    sink.clear()

    led.burn(ALICE, 10)
    led.burn_from(BOB, ALICE, 30)

    assert led.balance_of(ALICE) == 60
    assert led.total_supply() == 60
    assert led.allowance(ALICE, BOB) == 0
    assert sink.events == [
        Transfer(sender=ALICE, recipient=ZERO_ADDRESS, value=10),
        Transfer(sender=ALICE, recipient=ZERO_ADDRESS, value=30),
    ]


def test_burn_from_without_allowance(config: LedgerConfig) -> None:
    led = BurnableLedger(config=config)
    led._mint(ALICE, 100)
    with pytest.raises(InsufficientAllowance):
        led.burn_from(BOB, ALICE, 1)
    assert led.total_supply() == 100


# ---- Capped ----


def test_cap_validation(config: LedgerConfig) -> None:
    with pytest.raises(ValueError):
        CappedLedger(cap=0, config=config)
    with pytest.raises(ValueError):
        CappedLedger(cap=2**256, config=config)
    assert CappedLedger(cap=10, config=config).cap == 10


def test_cap_rolls_back_mint(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = CappedLedger(cap=100, config=config, sink=sink)
    led._mint(ALICE, 100)
    sink.clear()

    with pytest.raises(SupplyCapExceeded) as exc:
        led._mint(BOB, 1)

    assert exc.value.to_dict()["data"] == {"increased_supply": 101, "cap": 100}
    assert led.total_supply() == 100
    assert led.balance_of(BOB) == 0
    assert len(sink) == 0


def test_cap_does_not_limit_transfers(config: LedgerConfig) -> None:
    led = CappedLedger(cap=100, config=config)
    led._mint(ALICE, 100)
    led.transfer(ALICE, BOB, 100)
    led._burn(BOB, 40)
    led._mint(ALICE, 40)
    assert led.total_supply() == 100


# ---- Pausable ----


def test_pause_blocks_movements_but_not_approvals(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = PausableLedger(owner=ADMIN, config=config, sink=sink)
    led._mint(ALICE, 10)
    sink.clear()

    led.pause(ADMIN)
    assert led.paused()
    with pytest.raises(EnforcedPause):
        led.transfer(ALICE, BOB, 1)
    with pytest.raises(EnforcedPause):
        led._mint(ALICE, 1)
    with pytest.raises(EnforcedPause):
        led.pause(ADMIN)
    led.approve(ALICE, BOB, 5)

    led.unpause(ADMIN)
    with pytest.raises(ExpectedPause):
        led.unpause(ADMIN)
    led.transfer(ALICE, BOB, 1)

    assert sink.events == [
        Paused(account=ADMIN),
        Approval(owner=ALICE, spender=BOB, value=5),
        Unpaused(account=ADMIN),
        Transfer(sender=ALICE, recipient=BOB, value=1),
    ]


def test_pause_requires_owner(config: LedgerConfig) -> None:
    led = PausableLedger(owner=ADMIN, config=config)
    with pytest.raises(Unauthorized):
        led.pause(ALICE)
    assert not led.paused()


# ---- Allowance adjustments ----


def test_increase_and_decrease_allowance(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    led = AllowanceAdjustLedger(config=config, sink=sink)
    led.increase_allowance(ALICE, BOB, 10)
    led.increase_allowance(ALICE, BOB, 5)
    led.decrease_allowance(ALICE, BOB, 12)

    assert led.allowance(ALICE, BOB) == 3
    assert [e.value for e in sink.events] == [10, 15, 3]

    with pytest.raises(InsufficientAllowance):
        led.decrease_allowance(ALICE, BOB, 4)
    assert led.allowance(ALICE, BOB) == 3


def test_increase_allowance_overflow(config: LedgerConfig) -> None:
    led = AllowanceAdjustLedger(config=config)
    led.approve(ALICE, BOB, led.max_value)
    with pytest.raises(ArithmeticOverflow):
        led.increase_allowance(ALICE, BOB, 1)
    assert led.allowance(ALICE, BOB) == led.max_value


# ---- Composition ----


def test_composed_token(config: LedgerConfig, sink: InMemoryEventSink) -> None:
    tok = GovernedToken(owner=ADMIN, cap=1000, config=config, sink=sink)

    tok.mint(ADMIN, ALICE, 600)
    with pytest.raises(SupplyCapExceeded):
        tok.mint(ADMIN, BOB, 401)
    tok.burn(ALICE, 100)
    tok.mint(ADMIN, BOB, 500)

    tok.pause(ADMIN)
    with pytest.raises(EnforcedPause):
        tok.burn(ALICE, 1)
    tok.unpause(ADMIN)

    assert tok.cap == 1000
    assert tok.total_supply() == 1000
    assert tok.balance_of(ALICE) == 500
    assert tok.state.conserved()


def test_failed_ownership_change_inside_operation_is_reverted(config: LedgerConfig) -> None:
    led = OwnableLedger(owner=ADMIN, config=config)
    with pytest.raises(InvalidAddress):
        with led._atomic():
            led._set_owner(ALICE)
            led.transfer_ownership(ALICE, ZERO_ADDRESS)
    assert led.owner() == ADMIN
