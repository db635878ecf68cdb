"""
ledger.cli.replay
-----------------

Replay a JSONL script of ledger operations against a fresh ledger and report
each operation's outcome plus the final balances and supply.

Script format (one object per line; `#` lines and blank lines are skipped):

    {"op": "mint", "to": "0xaa…", "value": 1000}
    {"op": "transfer", "caller": "0xaa…", "to": "0xbb…", "value": 400}
    {"op": "approve", "caller": "0xaa…", "spender": "0xbb…", "value": "max"}
    {"op": "transfer_from", "caller": "0xbb…", "from": "0xaa…", "to": "0xcc…", "value": 100}
    {"op": "burn", "caller": "0xaa…", "value": 10}
    {"op": "burn_from", "caller": "0xbb…", "account": "0xaa…", "value": 10}
    {"op": "increase_allowance", "caller": "0xaa…", "spender": "0xbb…", "value": 5}
    {"op": "decrease_allowance", "caller": "0xaa…", "spender": "0xbb…", "value": 5}

`"value": "max"` stands for the largest representable amount (an unlimited
allowance when used with approve).

Examples
--------
python -m ledger.cli.replay run ops.jsonl
python -m ledger.cli.replay run ops.jsonl --json --events events.jsonl
python -m ledger.cli.replay info
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer

from .. import logging as llog
from ..config import LedgerConfig, load_config, summary
from ..errors import LedgerError, error_to_result_fields
from ..extensions.allowance import AllowanceAdjustLedger
from ..extensions.burnable import BurnableLedger
from ..metadata import TokenMetadata
from ..state.events import EventSink, InMemoryEventSink, JsonlEventSink
from ..version import version_metadata

app = typer.Typer(
    name="ledger-replay",
    add_completion=False,
    no_args_is_help=True,
    help="Replay ledger operations from a JSONL script.",
)

log = llog.get_logger("ledger.cli.replay")


class ReplayLedger(AllowanceAdjustLedger, BurnableLedger):
    """Ledger with every holder-facing operation; mints come from the script operator."""


class ScriptError(ValueError):
    """Malformed script line (not a ledger rejection)."""


# -------------------- script handling --------------------


def _value(raw: Any, led: ReplayLedger) -> int:
    if raw == "max":
        return led.max_value
    if isinstance(raw, str):
        try:
            return int(raw, 0)
        except ValueError as e:
            raise ScriptError(f"bad value {raw!r}") from e
    return raw


def _need(step: Dict[str, Any], *keys: str) -> List[Any]:
    missing = [k for k in keys if k not in step]
    if missing:
        raise ScriptError(f"op {step.get('op')!r} missing field(s): {', '.join(missing)}")
    return [step[k] for k in keys]


_Handler = Callable[[ReplayLedger, Dict[str, Any]], Any]

_HANDLERS: Dict[str, _Handler] = {
    "mint": lambda led, s: led._mint(*_need(s, "to"), _value(_need(s, "value")[0], led)),
    "burn": lambda led, s: led.burn(*_need(s, "caller"), _value(_need(s, "value")[0], led)),
    "transfer": lambda led, s: led.transfer(*_need(s, "caller", "to"), _value(_need(s, "value")[0], led)),
    "approve": lambda led, s: led.approve(*_need(s, "caller", "spender"), _value(_need(s, "value")[0], led)),
    "transfer_from": lambda led, s: led.transfer_from(
        *_need(s, "caller", "from", "to"), _value(_need(s, "value")[0], led)
    ),
    "burn_from": lambda led, s: led.burn_from(*_need(s, "caller", "account"), _value(_need(s, "value")[0], led)),
    "increase_allowance": lambda led, s: led.increase_allowance(
        *_need(s, "caller", "spender"), _value(_need(s, "value")[0], led)
    ),
    "decrease_allowance": lambda led, s: led.decrease_allowance(
        *_need(s, "caller", "spender"), _value(_need(s, "value")[0], led)
    ),
}


def load_script(path: Path) -> List[Dict[str, Any]]:
    steps: List[Dict[str, Any]] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            step = json.loads(text)
        except json.JSONDecodeError as e:
            raise ScriptError(f"line {lineno}: invalid JSON ({e.msg})") from e
        if not isinstance(step, dict) or step.get("op") not in _HANDLERS:
            raise ScriptError(f"line {lineno}: unknown op {step.get('op') if isinstance(step, dict) else step!r}")
        step["_line"] = lineno
        steps.append(step)
    return steps


def replay(
    steps: List[Dict[str, Any]],
    led: ReplayLedger,
    *,
    fail_fast: bool = False,
) -> List[Dict[str, Any]]:
    """Apply `steps` in order; returns one result dict per attempted step."""
    results: List[Dict[str, Any]] = []
    for i, step in enumerate(steps, start=1):
        res: Dict[str, Any] = {"index": i, "line": step.get("_line"), "op": step["op"]}
        try:
            _HANDLERS[step["op"]](led, step)
        except LedgerError as e:
            res.update(error_to_result_fields(e))
        else:
            res["status"] = "OK"
        results.append(res)
        if fail_fast and res["status"] != "OK":
            break
    return results


# -------------------- output --------------------


def _report(led: ReplayLedger, results: List[Dict[str, Any]], sink: EventSink) -> Dict[str, Any]:
    return {
        "results": results,
        "state": led.state.to_dict(),
        "events": [r.to_dict() for r in sink.get_events()],
    }


def _print_text(led: ReplayLedger, results: List[Dict[str, Any]]) -> None:
    for r in results:
        if r["status"] == "OK":
            typer.echo(f"#{r['index']:<4} {r['op']:<20} OK")
        else:
            typer.echo(f"#{r['index']:<4} {r['op']:<20} {r['status']} {r['error']['code']}")
    typer.echo("")
    typer.echo(f"total supply: {led.total_supply()}")
    for addr, bal in led.state.to_dict()["balances"].items():  # type: ignore[union-attr]
        typer.echo(f"  {addr}  {bal}")


# -------------------- commands --------------------


@app.command("run")
def run(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSONL script of operations."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
    events: Optional[Path] = typer.Option(None, "--events", help="Also write committed events to this JSONL file."),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first rejected operation."),
    uint_bits: Optional[int] = typer.Option(None, "--uint-bits", help="Integer width (default from LEDGER_UINT_BITS)."),
    name: str = typer.Option("Replay Token", help="Token name."),
    symbol: str = typer.Option("RPL", help="Token symbol."),
    decimals: int = typer.Option(18, min=0, max=255, help="Display decimals."),
) -> None:
    overrides: Dict[str, Any] = {"event_log": None}
    if uint_bits is not None:
        overrides["uint_bits"] = uint_bits
    try:
        cfg: LedgerConfig = load_config(overrides=overrides)
        steps = load_script(script)
        meta = TokenMetadata(name=name, symbol=symbol, decimals=decimals)
    except (ScriptError, ValueError, LedgerError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(2)

    memory = InMemoryEventSink()
    led = ReplayLedger(metadata=meta, config=cfg, sink=memory)
    with llog.trace_scope():
        llog.bind(component="replay")
        log.info("replaying script", extra={"script": str(script), "ops": len(steps)})
        try:
            results = replay(steps, led, fail_fast=fail_fast)
        except ScriptError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(2)

    if events is not None:
        out = JsonlEventSink(str(events))
        try:
            for ev in memory.events:
                out.append(ev)
        finally:
            out.close()

    if json_out:
        typer.echo(json.dumps(_report(led, results, memory), indent=2))
    else:
        _print_text(led, results)

    if any(r["status"] != "OK" for r in results):
        raise typer.Exit(1)


@app.command("info")
def info(json_out: bool = typer.Option(False, "--json", help="Output as JSON.")) -> None:
    meta = version_metadata()
    try:
        cfg = load_config()
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(2)
    if json_out:
        typer.echo(json.dumps({"version": meta, "config": cfg.to_dict()}, indent=2))
    else:
        typer.echo(f"ledger {meta['describe']}")
        typer.echo(summary(cfg))


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for stderr output."),
) -> None:
    llog.configure(level=log_level)


if __name__ == "__main__":
    app()
