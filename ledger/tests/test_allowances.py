from __future__ import annotations

import pytest

from ledger.errors import (InsufficientAllowance, InsufficientBalance, InvalidApprover,
                           InvalidReceiver, InvalidSpender)
from ledger.state.allowances import AllowanceStore
from ledger.state.balances import LedgerState
from ledger.state.events import InMemoryEventSink
from ledger.state.journal import Journal
from ledger.token import Ledger
from ledger.types.address import ZERO_ADDRESS
from ledger.types.amount import U256_MAX
from ledger.types.events import Approval, Transfer

ALICE = b"\xaa" * 20
BOB = b"\xbb" * 20
CAROL = b"\xcc" * 20


@pytest.fixture
def funded(ledger: Ledger, sink: InMemoryEventSink) -> Ledger:
    ledger._mint(ALICE, 1000)
    sink.clear()
    return ledger


# ---- AllowanceStore in isolation ----


@pytest.fixture
def store() -> AllowanceStore:
    return AllowanceStore(LedgerState(), Journal(InMemoryEventSink()), infinite=U256_MAX)


def test_store_defaults_to_zero(store: AllowanceStore) -> None:
    assert store.get(ALICE, BOB) == 0


def test_store_approve_without_event() -> None:
    sink = InMemoryEventSink()
    store = AllowanceStore(LedgerState(), Journal(sink), infinite=U256_MAX)
    store.approve(ALICE, BOB, 7, emit_event=False)
    assert store.get(ALICE, BOB) == 7
    assert len(sink) == 0
    store.approve(ALICE, BOB, 8)
    assert sink.events == [Approval(owner=ALICE, spender=BOB, value=8)]


def test_store_rejects_zero_owner_and_spender(store: AllowanceStore) -> None:
    with pytest.raises(InvalidApprover):
        store.approve(ZERO_ADDRESS, BOB, 1)
    with pytest.raises(InvalidSpender):
        store.approve(ALICE, ZERO_ADDRESS, 1)
    assert store.get(ZERO_ADDRESS, BOB) == 0


def test_store_spend_decrements(store: AllowanceStore) -> None:
    store.approve(ALICE, BOB, 10)
    store.spend(ALICE, BOB, 4)
    assert store.get(ALICE, BOB) == 6


def test_store_spend_infinite_is_noop(store: AllowanceStore) -> None:
    store.approve(ALICE, BOB, U256_MAX)
    store.spend(ALICE, BOB, 10**30)
    assert store.get(ALICE, BOB) == U256_MAX


def test_store_spend_insufficient(store: AllowanceStore) -> None:
    store.approve(ALICE, BOB, 3)
    with pytest.raises(InsufficientAllowance) as exc:
        store.spend(ALICE, BOB, 4)
    assert (exc.value.allowance, exc.value.needed) == (3, 4)
    assert store.get(ALICE, BOB) == 3


# ---- Ledger.approve ----


def test_approve_sets_and_emits(funded: Ledger, sink: InMemoryEventSink) -> None:
    assert funded.approve(ALICE, BOB, 300) is True
    assert funded.allowance(ALICE, BOB) == 300
    assert sink.events == [Approval(owner=ALICE, spender=BOB, value=300)]


def test_approve_overwrites_rather_than_adds(funded: Ledger, sink: InMemoryEventSink) -> None:
    funded.approve(ALICE, BOB, 100)
    funded.approve(ALICE, BOB, 40)
    assert funded.allowance(ALICE, BOB) == 40
    assert [e.value for e in sink.events] == [100, 40]


def test_approve_zero_spender_rejected(funded: Ledger, sink: InMemoryEventSink) -> None:
    with pytest.raises(InvalidSpender):
        funded.approve(ALICE, ZERO_ADDRESS, 1)
    assert len(sink) == 0


def test_approve_from_zero_owner_rejected(funded: Ledger) -> None:
    with pytest.raises(InvalidApprover):
        funded.approve(ZERO_ADDRESS, BOB, 1)


def test_approve_does_not_need_balance(ledger: Ledger) -> None:
    ledger.approve(CAROL, BOB, 10**20)
    assert ledger.allowance(CAROL, BOB) == 10**20


# ---- Ledger.transfer_from ----


def test_transfer_from_spends_allowance_without_approval_event(
    funded: Ledger, sink: InMemoryEventSink
) -> None:
    funded.approve(ALICE, BOB, 300)
    sink.clear()

    assert funded.transfer_from(BOB, ALICE, CAROL, 300) is True

    assert funded.allowance(ALICE, BOB) == 0
    assert funded.balance_of(ALICE) == 700
    assert funded.balance_of(CAROL) == 300
    assert sink.events == [Transfer(sender=ALICE, recipient=CAROL, value=300)]


def test_transfer_from_infinite_allowance_unchanged(funded: Ledger) -> None:
    funded.approve(ALICE, BOB, funded.max_value)
    funded.transfer_from(BOB, ALICE, CAROL, 100)
    assert funded.allowance(ALICE, BOB) == U256_MAX
    assert funded.balance_of(CAROL) == 100


def test_transfer_from_insufficient_allowance(funded: Ledger, sink: InMemoryEventSink) -> None:
    funded.approve(ALICE, BOB, 50)
    sink.clear()

    with pytest.raises(InsufficientAllowance):
        funded.transfer_from(BOB, ALICE, CAROL, 51)

    assert funded.allowance(ALICE, BOB) == 50
    assert funded.balance_of(ALICE) == 1000
    assert funded.balance_of(CAROL) == 0
    assert len(sink) == 0


def test_transfer_from_restores_allowance_when_balance_short(funded: Ledger) -> None:
    funded.approve(ALICE, BOB, 5000)
    with pytest.raises(InsufficientBalance):
        funded.transfer_from(BOB, ALICE, CAROL, 2000)
    assert funded.allowance(ALICE, BOB) == 5000


def test_transfer_from_to_zero_address_restores_allowance(funded: Ledger) -> None:
    funded.approve(ALICE, BOB, 10)
    with pytest.raises(InvalidReceiver):
        funded.transfer_from(BOB, ALICE, ZERO_ADDRESS, 10)
    assert funded.allowance(ALICE, BOB) == 10


def test_transfer_from_without_any_allowance(funded: Ledger) -> None:
    with pytest.raises(InsufficientAllowance):
        funded.transfer_from(BOB, ALICE, CAROL, 1)


def test_transfer_from_zero_owner_rejected_as_approver(funded: Ledger) -> None:
    # a zero-value spend still writes the allowance, which forbids a zero owner
    with pytest.raises(InvalidApprover):
        funded.transfer_from(BOB, ZERO_ADDRESS, CAROL, 0)


def test_transfer_from_zero_caller_rejected_as_spender(funded: Ledger) -> None:
    with pytest.raises(InvalidSpender):
        funded.transfer_from(ZERO_ADDRESS, ALICE, CAROL, 0)
