"""Wiki link grammar: parse and rewrite Obsidian ``[[links]]``.

Pure functions, no infrastructure dependencies. Consumed by the book
walker for every chapter body and by the ``rewrite`` command.

Supported variants::

    [[target]]                  -> [target](target.md)
    [[target|text]]             -> [text](target.md)
    [[target#Section]]          -> [target](target.md#section)
    [[target#Section|text]]     -> [text](target.md#section)

Embeds (``![[...]]``) and links spanning lines are left untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

DEFAULT_LINK_EXTENSION = ".md"

# [[target#anchor|display]]: anchor and display optional.
# No group may contain brackets or a line break, so the innermost
# [[...]] wins when brackets are nested.
_WIKILINK_PATTERN = re.compile(
    r"(?<!!)\[\["
    r"(?P<target>[^\[\]#|\n]+)"
    r"(?:#(?P<anchor>[^\[\]|\n]+))?"
    r"(?:\|(?P<display>[^\[\]\n]+))?"
    r"\]\]"
)


@dataclass(frozen=True)
class WikiLink:
    """A wikilink parsed from chapter text."""

    target: str
    anchor: str | None = None  # raw section name after # if present
    display: str | None = None  # display text after | if present
    raw: str = field(default="", compare=False)  # matched source text, brackets included

    @property
    def text(self) -> str:
        """Visible link text: display text, else the bare target."""
        return self.display or self.target

    def path(self, extension: str = DEFAULT_LINK_EXTENSION) -> str:
        """Link destination: ``target`` + extension + optional ``#slug``."""
        path = f"{self.target}{extension}"
        if self.anchor:
            path += f"#{convert_anchor(self.anchor)}"
        return path

    def to_markdown(self, extension: str = DEFAULT_LINK_EXTENSION) -> str:
        return f"[{self.text}]({self.path(extension)})"


def convert_anchor(anchor: str) -> str:
    """Slugify a section name: lowercase, spaces and underscores to hyphens.

    Each space or underscore maps to exactly one hyphen, so runs are not
    collapsed (``"Getting  Started"`` -> ``"getting--started"``).
    """
    return anchor.lower().replace(" ", "-").replace("_", "-")


def _from_match(match: re.Match[str]) -> WikiLink | None:
    target = match.group("target").strip()
    if not target:
        return None
    anchor = (match.group("anchor") or "").strip()
    display = (match.group("display") or "").strip()
    return WikiLink(
        target=target,
        anchor=anchor or None,
        display=display or None,
        raw=match.group(0),
    )


def extract_wikilinks(content: str) -> list[WikiLink]:
    """Extract all ``[[wikilinks]]`` from markdown text, in order.

    Returns an empty list if no wikilinks are found.
    """
    results: list[WikiLink] = []
    for match in _WIKILINK_PATTERN.finditer(content):
        link = _from_match(match)
        if link is not None:
            results.append(link)
    return results


def rewrite_wikilinks(content: str, *, extension: str = DEFAULT_LINK_EXTENSION) -> str:
    """Replace every wikilink in *content* with a standard Markdown link.

    Text outside matched links is preserved exactly. Content without any
    wikilink is returned unchanged.
    """

    def _replace(match: re.Match[str]) -> str:
        link = _from_match(match)
        if link is None:
            return match.group(0)
        return link.to_markdown(extension)

    return _WIKILINK_PATTERN.sub(_replace, content)
