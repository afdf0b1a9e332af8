"""mdbook-obsidian: rewrite Obsidian wiki links in mdBook chapters."""

__version__ = "0.1.0"
