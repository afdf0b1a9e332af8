"""BaseService: shared foundation for mdbook-obsidian services.

Every service receives the resolved :class:`ObsidianSettings` at
construction time. Services are stateless beyond that and never touch
stdin/stdout; the command layer does the I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdbook_obsidian.config.models import LinksConfig

if TYPE_CHECKING:
    from mdbook_obsidian.config.settings import ObsidianSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class PreprocessService(BaseService):
            def run(self, raw: str) -> ServiceResult:
                links = self._links_config(overrides)
                ...
    """

    def __init__(self, settings: ObsidianSettings) -> None:
        self._settings = settings

    def _links_config(self, overrides: dict[str, object] | None = None) -> LinksConfig:
        """Settings-level link options with per-book *overrides* applied."""
        if not overrides:
            return self._settings.links
        logger.debug("Applying per-book link overrides: %s", sorted(overrides))
        return self._settings.links.merged(overrides)
