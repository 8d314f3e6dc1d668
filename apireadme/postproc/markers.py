"""Managed marker utilities for the README API region."""

from __future__ import annotations

import re

TOKEN_START = "<!-- @rnx-kit/api start -->"
TOKEN_END = "<!-- @rnx-kit/api end -->"


class MarkerManager:
    """Replaces the delimited API region of a README document."""

    def __init__(self, start: str = TOKEN_START, end: str = TOKEN_END) -> None:
        self.start = start
        self.end = end
        self._pattern = re.compile(f"{re.escape(start)}(.+){re.escape(end)}", re.DOTALL)

    def wrap(self, body: str) -> str:
        """Wrap `body` with the markers and one blank line of padding on each side."""
        return f"{self.start}\n\n{body}\n\n{self.end}"

    def has_region(self, markdown: str) -> bool:
        return self._pattern.search(markdown) is not None

    def apply(self, markdown: str, body: str) -> str:
        """Return `markdown` with the region replaced; unchanged when markers are absent."""
        return self._pattern.sub(lambda _match: self.wrap(body), markdown, count=1)


__all__ = ["MarkerManager", "TOKEN_END", "TOKEN_START"]
