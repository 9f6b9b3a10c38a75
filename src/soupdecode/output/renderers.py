"""Human-readable output for decode and select results.

``decode`` shows the decoded value as highlighted JSON, ``select`` a table
of matched nodes, and failures the CannotUnmarshalError chain as an
indented tree.  Any other op gets plain ``key: value`` lines.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.json import JSON
from rich.table import Table
from rich.text import Text

from soupdecode.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from soupdecode.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False, indent: int = 2) -> str:
    """Text for *result*; with *verbose*, chain details and the span tree.

    *indent* is the JSON indent for decoded values.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, indent)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One status line, or the bare matched texts for ``select``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "select":
        return "\n".join(item["text"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="soup.ok"), Text(f"  {result.op}", style="soup.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="soup.key"), Text(str(value)), sep="")


# ── Op renderers ──────────────────────────────────────────────────────


def _render_decode(result: ServiceResult, console: Console, indent: int) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    _field(console, "schema", result.data.get("schema", ""))
    console.print(JSON.from_data(result.data.get("value"), indent=indent))


def _render_select(result: ServiceResult, console: Console, indent: int) -> None:
    _status_line(console, result)
    console.print(
        Text("  selector: ", style="soup.key"),
        Text(str(result.data.get("selector", "")), style="soup.selector"),
        sep="",
    )
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items", [])
    if not items:
        return
    table = Table(show_header=True, header_style="soup.key", box=None)
    table.add_column("#", justify="right")
    table.add_column("Tag", style="soup.tag")
    table.add_column("Text")
    for item in items:
        table.add_row(str(item["index"]), item["tag"], item["text"])
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, indent: int) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    error = result.error
    code = error.code if error else "UNKNOWN"
    message = error.message if error else "Unknown error"
    console.print(
        Text("ERROR", style="soup.error"),
        Text(f"  {result.op}", style="soup.op"),
        Text(f"  {code}", style="soup.reason"),
    )
    console.print(f"  {message}", markup=False)
    if error is None:
        return
    for depth, level in enumerate(error.chain):
        where = level.get("type", "")
        if "field" in level:
            where += f".{level['field']}" if isinstance(level["field"], str) else f"[{level['field']}]"
        line = Text("  " + "  " * depth + "└ ")
        line.append(level["reason"], style="soup.reason")
        if where:
            line.append(f" {where}")
        if verbose and "detail" in level:
            line.append(f" ({level['detail']})", style="soup.key")
        console.print(line)
    if error.root_cause:
        console.print(f"  cause: {error.root_cause}", markup=False)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="soup.key"))
    telemetry = result.meta.get("telemetry")
    if telemetry:
        _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = f"{' ' * indent}{span.get('name', '?')}  {span.get('duration_ms', 0.0):.2f}ms"
    notes = "  ".join(f"{key}={value}" for key, value in span.get("annotations", {}).items())
    if notes:
        line += f"  {notes}"
    console.print(line, markup=False)
    for child in span.get("children", []):
        _render_span(console, child, indent + 2)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console, int], None]] = {
    "decode": _render_decode,
    "select": _render_select,
}
