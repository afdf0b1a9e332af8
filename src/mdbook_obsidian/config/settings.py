"""Unified settings: CLI flags, env vars, and book.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags passed by Click)
  2. Env vars with the ``MDBOOK_OBSIDIAN_`` prefix
  3. The ``[preprocessor.obsidian]`` table of ``book.toml``
  4. Code defaults baked into the section models

The per-book ``config`` that mdBook sends with each preprocessor run is
applied on top of this by the preprocess service.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mdbook_obsidian.config.discovery import find_config, load_preprocessor_table
from mdbook_obsidian.config.models import LinksConfig


class BookTomlSettingsSource(PydanticBaseSettingsSource):
    """Read the ``[preprocessor.obsidian]`` table into the ``links`` section."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                table = load_preprocessor_table(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            if table:
                self._data = {"links": table}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ObsidianSettings(BaseSettings):
    """Settings for one preprocessor invocation.

    Stored on the :class:`AppContext` at the CLI root level.

    Attributes:
        book_root: Directory holding ``book.toml`` (or CWD if none found).
        config_path: The ``book.toml`` that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "env_prefix": "MDBOOK_OBSIDIAN_",
        "env_nested_delimiter": "__",
    }

    book_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    links: LinksConfig = Field(default_factory=LinksConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the book.toml source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            BookTomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        book_root: Path | None = None,
        **cli_flags: Any,
    ) -> ObsidianSettings:
        """Construct settings from CLI invocation.

        Discovers ``book.toml`` via walk-up (or explicit *config_path*),
        resolves *book_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(book_root)

        resolved_root = book_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                book_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
