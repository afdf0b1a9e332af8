"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns the stream routing rules of the preprocessor
protocol: stdout carries only the payload, everything else goes to
stderr, and a failed ServiceResult becomes exit code 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdbook_obsidian.output.renderers import render_result

if TYPE_CHECKING:
    from mdbook_obsidian.config.settings import ObsidianSettings
    from mdbook_obsidian.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ObsidianSettings) -> None:
        self.settings = settings

        from mdbook_obsidian.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from mdbook_obsidian.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult, *, payload: str | None = None) -> None:
        """Write a ServiceResult with preprocessor exit semantics.

        * Success: writes *payload* (or the rendered result when no
          payload is given) to stdout; an empty payload writes nothing.
          Warnings always go to stderr.
        * Failure: renders the error to stderr and exits with code 1.
          Nothing is written to stdout.
        """
        if not result.ok:
            click.echo(render_result(result, verbose=self.settings.verbose), err=True)
            raise SystemExit(1)

        if payload is None:
            click.echo(render_result(result, verbose=self.settings.verbose))
        elif payload:
            click.echo(payload, nl=not payload.endswith("\n"))
            if self.settings.verbose and result.meta:
                click.echo(render_result(result, verbose=True), err=True)
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
