"""
ledger.config — runtime configuration for the ledger.

Centralizes knobs for:
  • Numeric domain (integer width, address width)
  • Display defaults (decimals)
  • Event output (optional JSONL event log)
  • Observability (metrics on/off; logging is configured via ledger.logging)

Configuration may be provided via environment variables. Safe defaults are
chosen so a local run works out of the box.

Environment variables (all optional):
  LEDGER_UINT_BITS       -> integer width, multiple of 8 in [8, 256] (default: 256)
  LEDGER_ADDRESS_BYTES   -> address width in bytes, [1, 64] (default: 20)
  LEDGER_DECIMALS        -> default display decimals, [0, 255] (default: 18)
  LEDGER_EVENT_LOG       -> path of a JSONL event log (default: unset)
  LEDGER_METRICS         -> 0/1/true/false (default: 1)

Programmatic usage:
    from ledger.config import get_config
    cfg = get_config()
    cap = cfg.domain.uint_max
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from .types.address import DEFAULT_ADDRESS_BYTES
from .types.amount import DEFAULT_UINT_BITS, uint_max

# ----------------------------- helpers -------------------------------------


_BOOL_TRUE = {"1", "true", "t", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "f", "no", "n", "off"}


def _bool_env(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in _BOOL_TRUE:
        return True
    if v in _BOOL_FALSE:
        return False
    return bool(v) if v != "" else default


# ------------------------------ dataclasses ---------------------------------


@dataclass(frozen=True)
class NumericDomain:
    uint_bits: int = DEFAULT_UINT_BITS
    address_bytes: int = DEFAULT_ADDRESS_BYTES

    @property
    def uint_max(self) -> int:
        return uint_max(self.uint_bits)


@dataclass(frozen=True)
class EventOptions:
    log_path: Optional[Path] = None


@dataclass(frozen=True)
class LedgerConfig:
    domain: NumericDomain = NumericDomain()
    events: EventOptions = EventOptions()
    decimals: int = 18
    metrics_enabled: bool = True

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d["events"]["log_path"] = str(self.events.log_path) if self.events.log_path else None
        return d


# ------------------------------ loader --------------------------------------


def _validate(cfg: LedgerConfig) -> LedgerConfig:
    bits = cfg.domain.uint_bits
    if bits < 8 or bits > 256 or bits % 8:
        raise ValueError("uint_bits must be a multiple of 8 in [8, 256]")
    if not (1 <= cfg.domain.address_bytes <= 64):
        raise ValueError("address_bytes must be in [1, 64]")
    if not (0 <= cfg.decimals <= 255):
        raise ValueError("decimals must be in [0, 255]")
    return cfg


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    overrides: Optional[Mapping[str, Union[str, int, bool, Path, None]]] = None,
) -> LedgerConfig:
    """
    Build a LedgerConfig from environment and optional overrides.

    Args:
        env: mapping to read variables from (default: os.environ)
        overrides: explicit field overrides; keys support:
          'uint_bits', 'address_bytes', 'decimals', 'event_log', 'metrics_enabled'
    """
    env = os.environ if env is None else env
    overrides = dict(overrides or {})

    domain = NumericDomain(
        uint_bits=int(overrides.get("uint_bits", env.get("LEDGER_UINT_BITS", DEFAULT_UINT_BITS))),
        address_bytes=int(
            overrides.get("address_bytes", env.get("LEDGER_ADDRESS_BYTES", DEFAULT_ADDRESS_BYTES))
        ),
    )

    raw_log = overrides.get("event_log", env.get("LEDGER_EVENT_LOG"))
    events = EventOptions(log_path=Path(str(raw_log)).expanduser() if raw_log else None)

    if "metrics_enabled" in overrides:
        metrics_enabled = bool(overrides["metrics_enabled"])
    else:
        metrics_enabled = _bool_env(env.get("LEDGER_METRICS"), True)

    cfg = LedgerConfig(
        domain=domain,
        events=events,
        decimals=int(overrides.get("decimals", env.get("LEDGER_DECIMALS", 18))),
        metrics_enabled=metrics_enabled,
    )
    return _validate(cfg)


@lru_cache(maxsize=1)
def get_config() -> LedgerConfig:
    """
    Cached global config. Suitable for application bootstraps; tests should
    build their own with `load_config(env={...})`.
    """
    return load_config()


# ----------------------------- pretty-print ---------------------------------


def summary(cfg: Optional[LedgerConfig] = None) -> str:
    """Return a one-line summary of the most important ledger knobs."""
    cfg = cfg or get_config()
    return (
        "ledger{"
        f"uint={cfg.domain.uint_bits}b, addr={cfg.domain.address_bytes}B, "
        f"decimals={cfg.decimals}, events={cfg.events.log_path or 'memory'}, "
        f"metrics={int(cfg.metrics_enabled)}"
        "}"
    )


__all__ = [
    "NumericDomain",
    "EventOptions",
    "LedgerConfig",
    "load_config",
    "get_config",
    "summary",
]
