"""
ledger.metrics — Prometheus counters, gauges and histograms for ledger operations.

A private CollectorRegistry is created on first use (or injected with
`set_registry` before that) so embedding applications can expose it next to
their own metrics via `generate_latest_text()`.

Exposed metrics (prefixed with `ledger_`):
  - ops_total{op,result}         : Counter   — operations by outcome
  - op_seconds{op}               : Histogram — wall time per operation
  - total_supply{token}          : Gauge     — supply after the last commit

Labels:
  - op     ∈ {transfer, approve, transfer_from, mint, burn, burn_from, ...}
  - result ∈ {success, rejected}  (rejections also counted per error code
             in `rejections_total{op,code}`)
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from prometheus_client import (CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge,
                               Histogram, generate_latest)

_PREFIX = "ledger_"


def _buckets_from_env(name: str, default: Iterable[float]) -> Iterable[float]:
    raw = os.getenv(name)
    if not raw:
        return default
    out = []
    for tok in raw.split(","):
        tok = tok.strip()
        if not tok:
            continue
        try:
            out.append(float(tok))
        except ValueError:
            continue
    return out or default


_OP_SECONDS_BUCKETS = tuple(
    _buckets_from_env(
        "LEDGER_METRICS_OP_SECONDS_BUCKETS",
        # 10µs .. 100ms
        (0.00001, 0.000025, 0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.005, 0.01, 0.1),
    )
)


@dataclass
class _Metrics:
    ops_total: Counter
    rejections_total: Counter
    op_seconds: Histogram
    total_supply: Gauge


_registry: Optional[CollectorRegistry] = None
_metrics: Optional[_Metrics] = None


def set_registry(registry: CollectorRegistry) -> None:
    """
    Inject a custom CollectorRegistry. Must be called before the first
    metric is recorded; later calls are ignored.
    """
    global _registry
    if _registry is None:
        _registry = registry


def get_registry() -> CollectorRegistry:
    global _registry
    if _registry is None:
        _registry = CollectorRegistry()
    return _registry


def _m() -> _Metrics:
    global _metrics
    if _metrics is None:
        reg = get_registry()
        _metrics = _Metrics(
            ops_total=Counter(
                _PREFIX + "ops_total",
                "Ledger operations by outcome.",
                labelnames=("op", "result"),
                registry=reg,
            ),
            rejections_total=Counter(
                _PREFIX + "rejections_total",
                "Rejected ledger operations by error code.",
                labelnames=("op", "code"),
                registry=reg,
            ),
            op_seconds=Histogram(
                _PREFIX + "op_seconds",
                "Wall time per ledger operation.",
                labelnames=("op",),
                buckets=_OP_SECONDS_BUCKETS,
                registry=reg,
            ),
            total_supply=Gauge(
                _PREFIX + "total_supply",
                "Total supply after the last committed operation.",
                labelnames=("token",),
                registry=reg,
            ),
        )
    return _metrics


def observe_op(*, op: str, seconds: float, error_code: Optional[str] = None) -> None:
    """Record one operation; `error_code` is set when it was rejected."""
    m = _m()
    result = "success" if error_code is None else "rejected"
    m.ops_total.labels(op=op, result=result).inc()
    m.op_seconds.labels(op=op).observe(max(0.0, seconds))
    if error_code is not None:
        m.rejections_total.labels(op=op, code=error_code).inc()


def set_total_supply(token: str, supply: int) -> None:
    _m().total_supply.labels(token=token).set(float(supply))


class OpTimer:
    """
    Times one operation:

        t = OpTimer("transfer")
        ...
        t.done(error_code=None)
    """

    def __init__(self, op: str) -> None:
        self.op = op
        self._t0 = time.perf_counter()

    def done(self, error_code: Optional[str] = None) -> float:
        dt = time.perf_counter() - self._t0
        observe_op(op=self.op, seconds=dt, error_code=error_code)
        return dt


def generate_latest_text() -> bytes:
    """Prometheus exposition format for the current registry."""
    return generate_latest(get_registry())


__all__ = [
    "get_registry",
    "set_registry",
    "observe_op",
    "set_total_supply",
    "OpTimer",
    "generate_latest_text",
    "CONTENT_TYPE_LATEST",
]
