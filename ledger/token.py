"""
ledger.token — the fungible-token ledger.

The Ledger owns total supply and balances, and routes every balance or supply
change through one state-transition routine, `_update`. It is the only
component allowed to mutate its `LedgerState`.

Public interface
----------------
# views (no side effects, never fail on well-formed input)
total_supply() -> int
balance_of(account) -> int
allowance(owner, spender) -> int
name() / symbol() / decimals()

# state-changing (explicit caller, return True or raise LedgerError)
transfer(caller, to, value)
approve(caller, spender, value)
transfer_from(caller, sender, to, value)

# internal primitives (used by extensions and by the hosting environment)
_update(sender, recipient, value)   single override point for movement rules
_mint(account, value)
_burn(account, value)
_transfer(sender, recipient, value)
_approve(owner, spender, value, emit_event=True)
_spend_allowance(owner, spender, value)

Atomicity
---------
Every mutating method runs inside a journal checkpoint. Any exception reverts
all writes of the operation and discards its events; events reach the sink
only when the outermost operation commits.

Extending
---------
Derived ledgers (caps, pausing, fees) override `_update` and call
`super()._update(...)`; they never touch the balance tables directly.

    class FeeLedger(Ledger):
        def _update(self, sender, recipient, value):
            ...
            super()._update(sender, recipient, value)
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, TypeVar, cast

from .config import LedgerConfig, get_config
from .errors import (ArithmeticOverflow, InsufficientBalance, InvalidReceiver,
                     InvalidSender, LedgerError)
from .logging import get_logger
from .metadata import TokenMetadata
from .metrics import OpTimer, set_total_supply
from .state.allowances import AllowanceStore
from .state.balances import BalanceTable, LedgerState
from .state.events import EventSink, InMemoryEventSink, JsonlEventSink
from .state.journal import Journal
from .types.address import AddressLike, is_zero, to_address, zero_address
from .types.amount import ensure_amount
from .types.events import LedgerEvent, Transfer

log = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def operation(op: str) -> Callable[[F], F]:
    """
    Run a ledger method as one atomic operation.

    Nested calls join the enclosing checkpoint; only the outermost call logs,
    records metrics and delivers events.
    """

    def deco(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(self: "Ledger", *args: Any, **kwargs: Any) -> Any:
            outer = self._journal.depth() == 0
            timer = OpTimer(op) if outer and self.config.metrics_enabled else None
            try:
                with self._journal.atomic():
                    result = fn(self, *args, **kwargs)
            except LedgerError as e:
                if outer:
                    log.info("%s rejected", op, extra={"op": op, "code": e.code})
                    if timer is not None:
                        timer.done(e.code)
                raise
            if outer:
                log.debug("%s committed", op, extra={"op": op, "supply": self.state.total_supply})
                if timer is not None:
                    timer.done()
                    set_total_supply(self.label, self.state.total_supply)
            return result

        return cast(F, wrapper)

    return deco


class Ledger:
    """
    Parameters
    ----------
    metadata : TokenMetadata | None
        Display metadata; `decimals()` falls back to the configured default.
    config : LedgerConfig | None
        Numeric domain and observability settings (default: `get_config()`).
    sink : EventSink | None
        Receives committed events. Defaults to a JSONL sink when the config
        names an event log, otherwise an in-memory sink.
    state : LedgerState | None
        Pre-existing state to own (default: empty, zero supply). Must fit the
        configured widths and conserve supply, else ValueError.

    A ledger that opened its own sink releases it on `close()` or when used
    as a context manager.
    """

    def __init__(
        self,
        *,
        metadata: Optional[TokenMetadata] = None,
        config: Optional[LedgerConfig] = None,
        sink: Optional[EventSink] = None,
        state: Optional[LedgerState] = None,
    ) -> None:
        self.config = config or get_config()
        self.metadata = metadata
        self.label = metadata.symbol if metadata else "default"

        self._address_bytes = self.config.domain.address_bytes
        self._max = self.config.domain.uint_max
        self.zero_address = zero_address(self._address_bytes)

        if state is not None:
            self._check_state(state)
        self.state = state if state is not None else LedgerState()

        self._owns_sink = sink is None
        if sink is None:
            path = self.config.events.log_path
            sink = JsonlEventSink(str(path)) if path else InMemoryEventSink()

        self._journal = Journal(sink)
        self._balances = BalanceTable(self.state, self._journal)
        self._allowances = AllowanceStore(self.state, self._journal, infinite=self._max)

    def _check_state(self, state: LedgerState) -> None:
        """Reject injected state that breaks the width, address or supply rules."""

        def account(key: object) -> bool:
            return isinstance(key, bytes) and len(key) == self._address_bytes and not is_zero(key)

        def amount(v: object) -> bool:
            return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= self._max

        if not amount(state.total_supply):
            raise ValueError("state total_supply is outside the integer width")
        for acct, bal in state.balances.items():
            if not account(acct):
                raise ValueError(f"state balance key {acct!r} is not a non-zero {self._address_bytes}-byte address")
            if not amount(bal):
                raise ValueError(f"state balance {bal!r} is outside the integer width")
        for key, allowed in state.allowances.items():
            if not (isinstance(key, tuple) and len(key) == 2 and all(account(k) for k in key)):
                raise ValueError(f"state allowance key {key!r} is not an (owner, spender) address pair")
            if not amount(allowed):
                raise ValueError(f"state allowance {allowed!r} is outside the integer width")
        if not state.conserved():
            raise ValueError("state total_supply does not equal the sum of balances")

    def close(self) -> None:
        """Release the event sink if this ledger opened it."""
        if self._owns_sink:
            self._journal.sink.close()

    def __enter__(self) -> "Ledger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Input normalization
    # ------------------------------------------------------------------ #

    def _addr(self, value: AddressLike) -> bytes:
        return to_address(value, width=self._address_bytes)

    def _amount(self, value: int) -> int:
        return ensure_amount(value, cap=self._max)

    # ------------------------------------------------------------------ #
    # Metadata (delegated to the collaborator)
    # ------------------------------------------------------------------ #

    def name(self) -> str:
        return self.metadata.name if self.metadata else ""

    def symbol(self) -> str:
        return self.metadata.symbol if self.metadata else ""

    def decimals(self) -> int:
        return self.metadata.decimals if self.metadata else self.config.decimals

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #

    @property
    def events(self) -> EventSink:
        return self._journal.sink

    @property
    def max_value(self) -> int:
        """Largest representable amount; as an allowance it means unlimited."""
        return self._max

    def total_supply(self) -> int:
        return self._balances.total_supply

    def balance_of(self, account: AddressLike) -> int:
        return self._balances.get(self._addr(account))

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        return self._allowances.get(self._addr(owner), self._addr(spender))

    # ------------------------------------------------------------------ #
    # Public mutations
    # ------------------------------------------------------------------ #

    @operation("transfer")
    def transfer(self, caller: AddressLike, to: AddressLike, value: int) -> bool:
        """Move `value` from `caller` to `to`."""
        self._transfer(caller, to, value)
        return True

    @operation("approve")
    def approve(self, caller: AddressLike, spender: AddressLike, value: int) -> bool:
        """Set allowance(caller, spender) = value (overwrite). Always emits Approval."""
        self._approve(caller, spender, value)
        return True

    @operation("transfer_from")
    def transfer_from(
        self, caller: AddressLike, sender: AddressLike, to: AddressLike, value: int
    ) -> bool:
        """
        `caller` moves `value` from `sender` to `to`, consuming
        allowance(sender, caller). The allowance decrement emits no Approval.
        """
        self._spend_allowance(sender, caller, value)
        self._transfer(sender, to, value)
        return True

    # ------------------------------------------------------------------ #
    # Internal primitives
    # ------------------------------------------------------------------ #

    @operation("transfer")
    def _transfer(self, sender: AddressLike, recipient: AddressLike, value: int) -> None:
        frm, to, value = self._addr(sender), self._addr(recipient), self._amount(value)
        if is_zero(frm):
            raise InvalidSender(frm)
        if is_zero(to):
            raise InvalidReceiver(to)
        self._update(frm, to, value)

    @operation("mint")
    def _mint(self, account: AddressLike, value: int) -> None:
        to, value = self._addr(account), self._amount(value)
        if is_zero(to):
            raise InvalidReceiver(to)
        self._update(self.zero_address, to, value)

    @operation("burn")
    def _burn(self, account: AddressLike, value: int) -> None:
        frm, value = self._addr(account), self._amount(value)
        if is_zero(frm):
            raise InvalidSender(frm)
        self._update(frm, self.zero_address, value)

    @operation("approve")
    def _approve(
        self, owner: AddressLike, spender: AddressLike, value: int, emit_event: bool = True
    ) -> None:
        self._allowances.approve(self._addr(owner), self._addr(spender), self._amount(value), emit_event)

    @operation("spend_allowance")
    def _spend_allowance(self, owner: AddressLike, spender: AddressLike, value: int) -> None:
        self._allowances.spend(self._addr(owner), self._addr(spender), self._amount(value))

    def _update(self, sender: bytes, recipient: bytes, value: int) -> None:
        """
        Move `value` from `sender` to `recipient`, minting when `sender` is the
        zero address and burning when `recipient` is. Emits exactly one
        Transfer. Sole writer of balances and supply; callers hold a checkpoint.
        """
        if is_zero(sender):
            supply = self._balances.total_supply + value
            if supply > self._max:
                raise ArithmeticOverflow("total supply overflow", value=supply, limit=self._max)
            self._balances.set_total_supply(supply)
        else:
            from_balance = self._balances.get(sender)
            if from_balance < value:
                raise InsufficientBalance(sender, from_balance, value)
            self._balances.set(sender, from_balance - value)

        if is_zero(recipient):
            # value <= supply: it was either just minted or held by `sender`
            self._balances.set_total_supply(self._balances.total_supply - value)
        else:
            # balance(recipient) + value <= supply <= max
            self._balances.set(recipient, self._balances.get(recipient) + value)

        self._emit(Transfer(sender=sender, recipient=recipient, value=value))

    def _emit(self, event: LedgerEvent) -> None:
        self._journal.emit(event)

    def _atomic(self) -> Any:
        """Checkpoint scope for extension code that composes several writes."""
        return self._journal.atomic()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label} supply={self.total_supply()} accounts={len(self._balances)}>"


__all__ = ["Ledger", "operation"]
