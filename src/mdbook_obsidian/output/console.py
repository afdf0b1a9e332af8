"""Rich Console factory and theme for mdbook-obsidian output.

Consoles render into a StringIO buffer so callers get a plain string
back and decide which stream it belongs on. In non-TTY environments
(tests, pipes, mdBook itself) Rich disables color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

OBSIDIAN_THEME = Theme(
    {
        "mdo.ok": "bold green",
        "mdo.error": "bold red",
        "mdo.warning": "bold yellow",
        "mdo.op": "bold cyan",
        "mdo.key": "dim",
        "mdo.target": "bold blue",
        "mdo.anchor": "magenta",
        "mdo.markdown": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=OBSIDIAN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
