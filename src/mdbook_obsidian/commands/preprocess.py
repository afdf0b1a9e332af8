"""Command: run as an mdBook preprocessor (stdin -> stdout)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from mdbook_obsidian.commands._base import ObsidianCommand

if TYPE_CHECKING:
    from mdbook_obsidian.commands._context import AppContext


@click.command(
    cls=ObsidianCommand,
    examples="""\
  mdbook-obsidian < input.json > book.json
  mdbook-obsidian preprocess < input.json
  mdbook-obsidian -v --log-json preprocess < input.json""",
)
@click.pass_obj
def preprocess(app: AppContext) -> None:
    """Read [context, book] JSON from stdin and write the book to stdout.

    This is also what runs when no subcommand is given, which is how
    mdBook invokes a preprocessor.
    """
    from mdbook_obsidian.services.preprocess import PreprocessService

    # mdBook always sends UTF-8, whatever the locale says.
    with click.open_file("-", encoding="utf-8") as stdin:
        raw = stdin.read()
    result = PreprocessService(app.settings).run(raw)
    # ASCII-only JSON survives any stdout encoding.
    payload = json.dumps(result.data["book"]) if result.ok else None
    app.emit(result, payload=payload)
