"""Subcommand modules for mdbook-obsidian.

Provides register_commands() which uses deferred imports so that
``mdbook-obsidian supports html`` stays fast; mdBook calls it on every
build.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from mdbook_obsidian.commands.preprocess import preprocess
    from mdbook_obsidian.commands.rewrite import rewrite
    from mdbook_obsidian.commands.supports import supports

    cli.add_command(supports)
    cli.add_command(preprocess)
    cli.add_command(rewrite)
