"""Config file discovery and loading.

Walk-up finder locates ``book.toml``, the same way mdBook resolves the
book root from the current directory. Supports the
``MDBOOK_OBSIDIAN_CONFIG`` env var and the ``--config`` CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "book.toml"
CONFIG_ENV_VAR = "MDBOOK_OBSIDIAN_CONFIG"
PREPROCESSOR_NAME = "obsidian"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for book.toml.

    Returns the path to the config file, or None if not found.
    Checks MDBOOK_OBSIDIAN_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def preprocessor_table(data: dict[str, Any], name: str = PREPROCESSOR_NAME) -> dict[str, Any]:
    """Pick ``[preprocessor.<name>]`` out of parsed book.toml data."""
    section = data.get("preprocessor")
    if not isinstance(section, dict):
        return {}
    table = section.get(name, {})
    return table if isinstance(table, dict) else {}


def load_preprocessor_table(path: Path) -> dict[str, Any]:
    """Read *path* and return its ``[preprocessor.obsidian]`` table.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    return preprocessor_table(tomllib.loads(raw))
