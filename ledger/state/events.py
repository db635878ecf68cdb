"""
ledger.state.events — pluggable event sinks.

A small interface for recording and querying the events committed by ledger
operations. Three backends ship here:

- InMemoryEventSink: fast, test/dev friendly; keeps all records in RAM.
- JsonlEventSink: append-only JSONL file; durable and simple to operate.
- NullEventSink: no-op sink for benchmarks or setups that ignore events.

Records are numbered with a per-sink sequence (`seq`) in commit order. The
ledger hands events to the sink only after an operation commits, so a sink
never sees events of a rejected operation.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Type, runtime_checkable

from ..types.events import (Approval, LedgerEvent, OwnershipTransferred, Paused,
                            Transfer, Unpaused)

_EVENT_TYPES: Dict[str, Type[LedgerEvent]] = {
    cls.name: cls for cls in (Transfer, Approval, OwnershipTransferred, Paused, Unpaused)
}


def _h2b(h: str) -> bytes:
    if h.startswith(("0x", "0X")):
        h = h[2:]
    return bytes.fromhex(h)


def event_from_dict(obj: Dict[str, Any]) -> LedgerEvent:
    """Inverse of `LedgerEvent.to_dict()` for the known event types."""
    cls = _EVENT_TYPES.get(obj.get("event", ""))
    if cls is None:
        raise ValueError(f"unknown event type: {obj.get('event')!r}")
    kwargs: Dict[str, Any] = {}
    for k, v in obj.items():
        if k == "event":
            continue
        kwargs[k] = _h2b(v) if isinstance(v, str) else v
    return cls(**kwargs)


# =============================================================================
# Public data model
# =============================================================================


@dataclass(frozen=True)
class EventRecord:
    """A committed event and its position in the sink."""

    seq: int
    event: LedgerEvent

    @property
    def name(self) -> str:
        return self.event.name

    def to_dict(self) -> Dict[str, Any]:
        return {"seq": self.seq, **self.event.to_dict()}


# =============================================================================
# Sink interface
# =============================================================================


@runtime_checkable
class EventSink(Protocol):
    def append(self, event: LedgerEvent) -> EventRecord:
        """Append a committed event. Returns the stored record."""

    def get_events(
        self,
        *,
        name: Optional[str] = None,
        address: Optional[bytes] = None,
        limit: Optional[int] = None,
    ) -> Iterable[EventRecord]:
        """Iterate matching records in commit order."""

    def flush(self) -> None:
        """Force persistence, if applicable."""

    def close(self) -> None:
        """Release resources (files, buffers)."""


def _record_matches(rec: EventRecord, name: Optional[str], address: Optional[bytes]) -> bool:
    if name is not None and rec.event.name != name:
        return False
    if address is not None and address not in rec.event.addresses():
        return False
    return True


# =============================================================================
# In-memory sink
# =============================================================================


class InMemoryEventSink(EventSink):
    """
    A simple, thread-safe in-memory sink. Suitable for unit tests and tooling.
    """

    def __init__(self) -> None:
        self._records: List[EventRecord] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def events(self) -> List[LedgerEvent]:
        """Committed events in order (a copy)."""
        with self._lock:
            return [r.event for r in self._records]

    def append(self, event: LedgerEvent) -> EventRecord:
        with self._lock:
            rec = EventRecord(seq=len(self._records), event=event)
            self._records.append(rec)
        return rec

    def get_events(
        self,
        *,
        name: Optional[str] = None,
        address: Optional[bytes] = None,
        limit: Optional[int] = None,
    ) -> Iterable[EventRecord]:
        with self._lock:
            snapshot = list(self._records)
        n = 0
        for rec in snapshot:
            if not _record_matches(rec, name, address):
                continue
            yield rec
            n += 1
            if limit is not None and n >= limit:
                break

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def flush(self) -> None:
        return

    def close(self) -> None:
        self.clear()


# =============================================================================
# JSONL sink (durable)
# =============================================================================


class JsonlEventSink(EventSink):
    """
    Append-only JSONL sink. Each line is one record:

        {"seq": 0, "event": "Transfer", "sender": "0x…", "recipient": "0x…", "value": 1000}

    The file is opened line-buffered in append mode; `flush()` fsyncs. An
    existing file is continued: `seq` resumes after the last line.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        self._fh = open(path, "a+", encoding="utf-8", buffering=1)
        self._lock = threading.RLock()
        self._log = logging.getLogger(__name__)
        self._fh.seek(0)
        self._next_seq = sum(1 for line in self._fh if line.strip())
        self._fh.seek(0, os.SEEK_END)

    @property
    def path(self) -> str:
        return self._path

    def append(self, event: LedgerEvent) -> EventRecord:
        with self._lock:
            rec = EventRecord(seq=self._next_seq, event=event)
            self._fh.write(json.dumps(rec.to_dict(), separators=(",", ":")) + "\n")
            self._next_seq += 1
        return rec

    def get_events(
        self,
        *,
        name: Optional[str] = None,
        address: Optional[bytes] = None,
        limit: Optional[int] = None,
    ) -> Iterable[EventRecord]:
        with self._lock:
            self._fh.flush()
            self._fh.seek(0)
            lines = self._fh.readlines()
            self._fh.seek(0, os.SEEK_END)
        count = 0
        for line in lines:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
                rec = EventRecord(seq=int(obj.pop("seq")), event=event_from_dict(obj))
            except (ValueError, KeyError, TypeError) as e:
                self._log.warning("Skipping malformed event line: %s (%r)", line[:120], e)
                continue
            if _record_matches(rec, name, address):
                yield rec
                count += 1
                if limit is not None and count >= limit:
                    break

    def flush(self) -> None:
        with self._lock:
            self._fh.flush()
            os.fsync(self._fh.fileno())

    def close(self) -> None:
        with self._lock:
            if self._fh.closed:
                return
            try:
                self._fh.flush()
            finally:
                self._fh.close()


# =============================================================================
# Null sink
# =============================================================================


class NullEventSink(EventSink):
    """A sink that drops everything."""

    def append(self, event: LedgerEvent) -> EventRecord:
        return EventRecord(seq=-1, event=event)

    def get_events(
        self,
        *,
        name: Optional[str] = None,
        address: Optional[bytes] = None,
        limit: Optional[int] = None,
    ) -> Iterable[EventRecord]:
        return iter(())

    def flush(self) -> None:
        return

    def close(self) -> None:
        return


__all__ = [
    "EventRecord",
    "EventSink",
    "InMemoryEventSink",
    "JsonlEventSink",
    "NullEventSink",
    "event_from_dict",
]
