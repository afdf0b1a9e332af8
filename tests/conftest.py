"""Shared pytest fixtures and test helpers for mdbook-obsidian tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mdbook_obsidian.config.settings import ObsidianSettings
from mdbook_obsidian.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_book(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty temp directory with no config env vars.

    Keeps book.toml walk-up discovery from finding a real book above the
    test run.
    """
    monkeypatch.chdir(tmp_path)
    for name in (
        "MDBOOK_OBSIDIAN_CONFIG",
        "MDBOOK_OBSIDIAN_VERBOSE",
        "MDBOOK_OBSIDIAN_LOG_JSON",
        "MDBOOK_OBSIDIAN_LINKS",
        "MDBOOK_OBSIDIAN_LINKS__LINK_EXTENSION",
        "MDBOOK_OBSIDIAN_LINKS__UNSUPPORTED_RENDERERS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo the root-logger changes every CLI invocation makes."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("mdbook_obsidian")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """--verbose CLI runs switch telemetry on for the current context."""
    yield
    disable_telemetry()


@pytest.fixture
def settings(tmp_path: Path) -> ObsidianSettings:
    """Default settings rooted at an empty temp book directory."""
    return ObsidianSettings.from_cli(book_root=tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def chapter(
    name: str,
    content: str,
    *,
    sub_items: list[Any] | None = None,
    number: list[int] | None = None,
) -> dict[str, Any]:
    """Build an mdBook ``{"Chapter": {...}}`` item."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": number,
            "sub_items": sub_items or [],
            "path": f"{name}.md",
            "source_path": f"{name}.md",
            "parent_names": [],
        }
    }


def make_context(renderer: str = "html", **config: Any) -> dict[str, Any]:
    """Build the context object mdBook sends ahead of the book."""
    return {
        "root": "/tmp/book",
        "config": {"book": {"title": "Test"}, **config},
        "renderer": renderer,
        "mdbook_version": "0.4.40",
    }


def make_book(*items: Any) -> dict[str, Any]:
    return {"sections": list(items), "__non_exhaustive": None}


def make_input(book: dict[str, Any], *, renderer: str = "html", **config: Any) -> str:
    """Serialize ``[context, book]`` the way mdBook writes it to stdin."""
    return json.dumps([make_context(renderer, **config), book])


@pytest.fixture
def sample_book() -> dict[str, Any]:
    """Two-level book with a separator and a part title."""
    return make_book(
        {"PartTitle": "Guide"},
        chapter(
            "introduction",
            "# Intro\n\nSee [[advanced]] and [[api#Methods]].\n",
            number=[1],
            sub_items=[
                chapter(
                    "setup",
                    "Read [[introduction#Getting Started|intro guide]] first.",
                    number=[1, 1],
                ),
            ],
        ),
        "Separator",
        chapter("advanced", "No links here.", number=[2]),
    )
