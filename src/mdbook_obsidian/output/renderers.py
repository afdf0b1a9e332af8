"""Rich renderers for ServiceResult.

Only diagnostics and the developer ``rewrite --list`` table go through
here; the preprocessor's book JSON is never rendered. Renderers are
dispatched by ``result.op``; unknown ops use a key-value fallback.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mdbook_obsidian.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mdbook_obsidian.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="mdo.key")
    console.print(k, Text(str(value)), sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {json.dumps(v, separators=(',', ':'))}"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="mdo.error")
    op = Text(f"  {result.op}", style="mdo.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text(f"No wiki links in {result.data.get('source', '-')}"))
        return

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Link")
    table.add_column("Target", style="mdo.target")
    table.add_column("Anchor", style="mdo.anchor")
    table.add_column("Display")
    table.add_column("Markdown", style="mdo.markdown")
    for item in items:
        table.add_row(
            Text(item.get("raw") or ""),
            Text(item["target"]),
            Text(item.get("anchor") or ""),
            Text(item.get("display") or ""),
            Text(item["markdown"]),
        )
    console.print(table)
    console.print(f"\n{len(items)} links")
    if verbose:
        _render_meta(console, result)


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line plus scalar fields; the book or document body is left out."""
    console.print(Text("OK", style="mdo.ok"), Text(f"  {result.op}", style="mdo.op"), sep="")
    for key, value in result.data.items():
        if key in ("book", "content"):
            continue
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text("OK", style="mdo.ok"), Text(f"  {result.op}", style="mdo.op"), sep="")
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "list_links": _render_links,
    "preprocess": _render_summary,
    "rewrite": _render_summary,
}
