"""Root CLI group for mdbook-obsidian with global flags and command registration.

mdBook invokes a preprocessor in two ways:

- ``mdbook-obsidian supports <renderer>``: exit status answers the question.
- ``mdbook-obsidian``: ``[context, book]`` JSON on stdin, book on stdout.

The bare form dispatches to the ``preprocess`` command.
"""

from __future__ import annotations

import click

from mdbook_obsidian import __version__
from mdbook_obsidian.commands import register_commands
from mdbook_obsidian.commands._context import AppContext
from mdbook_obsidian.config.settings import ObsidianSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mdbook-obsidian")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timings on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override book.toml path.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mdbook-obsidian: rewrite Obsidian [[wiki links]] as Markdown links."""
    settings = ObsidianSettings.from_cli(
        config_path=config_path,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from mdbook_obsidian.commands.preprocess import preprocess

        ctx.invoke(preprocess)


register_commands(cli)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
