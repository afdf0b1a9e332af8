"""Command: tell mdBook whether a renderer is supported."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdbook_obsidian.commands._base import ObsidianCommand

if TYPE_CHECKING:
    from mdbook_obsidian.commands._context import AppContext


@click.command(
    cls=ObsidianCommand,
    examples="""\
  mdbook-obsidian supports html
  mdbook-obsidian supports not-supported   # exits 1""",
)
@click.argument("renderer")
@click.pass_obj
def supports(app: AppContext, renderer: str) -> None:
    """Exit 0 if RENDERER is supported, 1 otherwise."""
    from mdbook_obsidian.services.preprocess import PreprocessService

    app.emit(PreprocessService(app.settings).supports(renderer), payload="")
