"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cmdsync.output.console import create_console, get_output, style_for_phase

if TYPE_CHECKING:
    from rich.console import Console

    from cmdsync.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="sync.ok")
    op = Text(f"  {result.op}", style="sync.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sync.key")
    v = Text(str(value), style="sync.scope" if key == "scope" else "")
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _outcome_table(outcomes: list[dict[str, Any]]) -> Table:
    """Build a Rich Table with one row per attempted mutation."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Phase", no_wrap=True)
    table.add_column("Command", style="bold")
    table.add_column("Status")

    for outcome in outcomes:
        phase = str(outcome.get("phase", ""))
        if outcome.get("ok"):
            status = Text("ok", style="sync.ok")
        else:
            status = Text(f"failed: {outcome.get('error', '')}", style="sync.error")
        table.add_row(
            Text(phase, style=style_for_phase(phase)), str(outcome.get("name", "")), status
        )

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sync.error")
    op = Text(f"  {result.op}", style="sync.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Sync renderers ────────────────────────────────────────────────────


def _render_sync(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the counts of a reconciliation pass plus its per-item outcomes."""
    _status_line(console, result)
    for key in ("scope", "observed", "created", "deleted", "updated", "failed"):
        if key in result.data:
            _field(console, key, result.data[key])

    outcomes = result.data.get("outcomes", [])
    if outcomes:
        console.print()
        console.print(_outcome_table(outcomes))
    if verbose:
        _render_meta(console, result)


def _render_diff(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a dry-run plan as +/-/~ lines."""
    _status_line(console, result)
    _field(console, "scope", result.data.get("scope", "global"))
    _field(console, "observed", result.data.get("observed", 0))

    if result.data.get("in_sync"):
        console.print("  Commands are in sync.")
    else:
        markers = (("create", "+"), ("delete", "-"), ("update", "~"))
        for phase, marker in markers:
            for name in result.data.get(phase, []):
                console.print(Text(f"  {marker} {name}", style=style_for_phase(phase)))

    if verbose:
        for name in result.data.get("unchanged", []):
            console.print(Text(f"  = {name}", style="dim"))
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "sync": _render_sync,
    "diff": _render_diff,
}
