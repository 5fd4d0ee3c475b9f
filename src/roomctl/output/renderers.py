"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from roomctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from roomctl.services.result import ServiceResult


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

    posts = result.data.get("posts")
    if posts and isinstance(posts, list):
        return "\n".join(str(line) for line in posts)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="room.ok")
    op = Text(f"  {result.op}", style="room.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="room.key")
    if key == "prefix":
        v = Text(str(value), style="room.prefix")
    elif key in ("output", "source"):
        v = Text(str(value), style="room.path")
    elif isinstance(value, int):
        v = Text(str(value), style="room.count")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_timing(console: Console, result: ServiceResult) -> None:
    """Print the operation and stage timings collected under ``-v``."""
    timing = (result.meta or {}).get("timing")
    if not timing:
        return

    console.print()
    console.print(
        Text.assemble(
            ("  timing: ", "room.key"),
            f"{timing.get('operation', result.op)} {timing.get('total_ms', 0.0):.2f}ms",
        )
    )
    for entry in timing.get("stages", []):
        name = entry.get("stage", "?")
        elapsed = entry.get("elapsed_ms") or 0.0
        counts = ", ".join(
            f"{k}={v}" for k, v in entry.items() if k not in ("stage", "elapsed_ms")
        )
        style = "dim" if elapsed < 100 else "room.warning"
        line = Text(f"    {name:<8} {elapsed:>8.2f}ms", style=style)
        if counts:
            line.append(f"  {counts}", style="room.count")
        console.print(line)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="room.error")
    op = Text(f"  {result.op}", style="room.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_migrate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the import pipeline summary."""
    _status_line(console, result)
    d = result.data
    for key in ("prefix", "seen", "written", "skipped"):
        if key in d:
            _field(console, key, d[key])
    if d.get("cleared"):
        _field(console, "cleared", d["cleared"])
    if verbose:
        _render_timing(console, result)


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a room as a header line plus one line per post."""
    d = result.data
    header = Text.assemble(
        (f"{d.get('prefix', '')}*", "room.prefix"),
        " – ",
        (f"{d.get('count', 0)} posts", "room.count"),
    )
    console.print(header)
    for line in d.get("posts", []):
        console.print(Text(f"  {line}"))
    if verbose:
        _render_timing(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        elif value is not None:
            _field(console, key, value)
    if verbose:
        _render_timing(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "migrate": _render_migrate,
    "show": _render_show,
    "export": _render_generic,
    "clear": _render_generic,
}
