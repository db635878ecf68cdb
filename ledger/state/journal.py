"""
ledger.state.journal — undo-log journal with nested checkpoints.

Every mutating ledger operation runs inside a checkpoint. Table writes record
the value they overwrite; `revert()` replays those records backwards so the
state is exactly what it was at `begin()`. Events emitted inside a checkpoint
are buffered and handed to the sink only when the *outermost* checkpoint
commits, so a failed operation leaves neither state changes nor events.

Intended usage
--------------
    j = Journal(sink)
    with j.atomic():
        j.record_item(balances, addr)
        balances[addr] = 123
        j.emit(Transfer(...))
    # committed: state kept, event delivered

Nested `atomic()` scopes behave as a stack: an inner revert discards only the
inner writes, an inner commit folds its writes into the enclosing scope.

Notes
-----
- Writes performed while no checkpoint is open are applied directly and are
  not revertible; events emitted then go straight to the sink.
- The journal enforces no economic rules; callers validate before writing.
- A sink failure during the outermost commit reverts the checkpoint. Events
  the sink accepted before the failure are not recalled.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Hashable, Iterator, List, MutableMapping, Optional, Tuple

from ..types.events import LedgerEvent
from .events import EventSink, NullEventSink

_MISSING = object()

# (kind, container, key, previous)
_UndoEntry = Tuple[str, Any, Any, Any]


class Journal:
    """
    Parameters
    ----------
    sink : EventSink | None
        Destination for committed events (defaults to a NullEventSink).
    """

    def __init__(self, sink: Optional[EventSink] = None) -> None:
        self.sink: EventSink = sink if sink is not None else NullEventSink()
        self._undo: List[_UndoEntry] = []
        self._pending: List[LedgerEvent] = []
        # Per-checkpoint (undo length, pending length) at begin()
        self._marks: List[Tuple[int, int]] = []

    # ------------------------------------------------------------------ #
    # Checkpointing
    # ------------------------------------------------------------------ #

    def depth(self) -> int:
        """Number of open checkpoints (0 when idle)."""
        return len(self._marks)

    def begin(self) -> int:
        """Open a checkpoint. Returns the new depth."""
        self._marks.append((len(self._undo), len(self._pending)))
        return len(self._marks)

    def commit(self) -> None:
        """
        Close the top checkpoint, keeping its writes. When the outermost
        checkpoint closes, buffered events are delivered to the sink in
        emission order and only then is the undo log dropped. If the sink
        raises, the checkpoint is reverted and the error propagates.
        """
        if not self._marks:
            raise RuntimeError("commit without an open checkpoint")
        if len(self._marks) > 1:
            self._marks.pop()
            return
        try:
            for ev in self._pending:
                self.sink.append(ev)
        except BaseException:
            self.revert()
            raise
        self._marks.pop()
        self._undo.clear()
        self._pending = []

    def revert(self) -> None:
        """Close the top checkpoint, undoing its writes and dropping its events."""
        if not self._marks:
            raise RuntimeError("revert without an open checkpoint")
        undo_len, pending_len = self._marks.pop()
        while len(self._undo) > undo_len:
            kind, container, key, previous = self._undo.pop()
            if kind == "item":
                if previous is _MISSING:
                    container.pop(key, None)
                else:
                    container[key] = previous
            else:
                setattr(container, key, previous)
        del self._pending[pending_len:]

    @contextmanager
    def atomic(self) -> Iterator["Journal"]:
        """Run the body as one all-or-nothing unit."""
        self.begin()
        try:
            yield self
        except BaseException:
            self.revert()
            raise
        self.commit()

    # ------------------------------------------------------------------ #
    # Write recording
    # ------------------------------------------------------------------ #

    def record_item(self, mapping: MutableMapping[Any, Any], key: Hashable) -> None:
        """Remember mapping[key] (or its absence) before it is overwritten."""
        if self._marks:
            self._undo.append(("item", mapping, key, mapping.get(key, _MISSING)))

    def record_attr(self, obj: Any, name: str) -> None:
        """Remember obj.<name> before it is overwritten."""
        if self._marks:
            self._undo.append(("attr", obj, name, getattr(obj, name)))

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def emit(self, event: LedgerEvent) -> None:
        if self._marks:
            self._pending.append(event)
        else:
            self.sink.append(event)

    def pending_events(self) -> Tuple[LedgerEvent, ...]:
        return tuple(self._pending)


__all__ = ["Journal"]
