"""A single input line."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fuzzfind.ansi import AnsiOffset, extract_color


@dataclass
class Item:
    """An input line as searched, with its ordinal index and colours.

    ``orig_text`` holds the line as read when ``text`` is a transformed form of it.
    """

    text: str
    index: int = 0
    colors: list[AnsiOffset] = field(default_factory=list)
    orig_text: Optional[str] = None
    transformed: Optional[list] = None

    def as_string(self, strip_ansi: bool) -> str:
        """Return the original line, optionally without escape sequences."""
        if self.orig_text is not None:
            if strip_ansi:
                trimmed, _, _ = extract_color(self.orig_text, None, None)
                return trimmed
            return self.orig_text
        return self.text