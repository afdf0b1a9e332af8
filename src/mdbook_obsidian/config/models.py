"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, the ``[preprocessor.obsidian]``
table of ``book.toml`` only contains overrides. Keys mdBook itself reads
from that table (``command``, ``renderers``, ``before``, ``after``) are
ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mdbook_obsidian.domain.links import DEFAULT_LINK_EXTENSION


class LinksConfig(BaseModel):
    """[preprocessor.obsidian] link rewriting options."""

    model_config = {"frozen": True, "extra": "ignore"}

    link_extension: str = DEFAULT_LINK_EXTENSION
    unsupported_renderers: list[str] = Field(default_factory=lambda: ["not-supported"])

    def merged(self, overrides: dict[str, object]) -> LinksConfig:
        """Return a copy with *overrides* applied and validated."""
        if not overrides:
            return self
        return LinksConfig.model_validate({**self.model_dump(), **overrides})
