"""Template-insert protection.

Template inserts (`{{ ... }}` by default) belong to a downstream rendering
engine and must survive the transform byte for byte. Before parsing they are
swapped for plain placeholder tokens that the tokenizer treats as ordinary
text, and swapped back once the tree has been serialized.
"""

from __future__ import annotations

import logging
import re

from .constants import PLACEHOLDER_PREFIX

logger = logging.getLogger(__name__)

_ESCAPABLE_CHARS = re.compile(r"([?+|$(){}\[\]^.\-\\/*])")


def escape_regexp(text: str) -> str:
    """Backslash-escape the regex metacharacters `? + | $ ( ) { } [ ] ^ . - \\ / *`."""
    return _ESCAPABLE_CHARS.sub(r"\\\1", text)


class TemplateProtector:
    """Swaps template inserts for collision-free placeholders and back.

    A placeholder is the prefix, a counter and a closing `_`, e.g.
    `htmlbind_12_`. The terminator keeps a placeholder followed by digits in
    the markup from reading as a different placeholder, so no placeholder is
    ever a substring of another and all of them are found with one pattern.

    One instance serves exactly one transform call: the counter and the
    registry of `(token, insert)` pairs are per-instance state.
    """

    __slots__ = ("_counter", "_insert_pattern", "_lookup", "_token_pattern", "inserts", "prefix")

    def __init__(self, delimiters: tuple[str, str], prefix: str = PLACEHOLDER_PREFIX) -> None:
        open_delimiter, close_delimiter = delimiters
        self._insert_pattern = re.compile(escape_regexp(open_delimiter) + r"[\s\S]*?" + escape_regexp(close_delimiter))
        self._token_pattern: re.Pattern[str] | None = None
        self._lookup: dict[str, str] = {}
        self._counter = 0
        self.prefix = prefix
        self.inserts: list[tuple[str, str]] = []

    @property
    def pattern(self) -> re.Pattern[str] | None:
        """Pattern matching placeholder-shaped text, None when nothing was protected."""
        return self._token_pattern

    def protect(self, html: str) -> str:
        # Placeholder-shaped text already in the markup; overlapping matches included.
        taken = set(re.findall(f"(?=({re.escape(self.prefix)}\\d+_))", html))
        parts: list[str] = []
        last = 0
        for match in self._insert_pattern.finditer(html):
            parts.append(html[last : match.start()])
            last = match.end()
            token = self._mint(taken)
            parts.append(token)
            self.inserts.append((token, match.group(0)))
            self._lookup[token] = match.group(0)
        if not self.inserts:
            return html
        parts.append(html[last:])

        self._token_pattern = re.compile(re.escape(self.prefix) + r"\d+_")
        logger.debug("Protected %d template inserts", len(self.inserts))
        return "".join(parts)

    def contains_placeholder(self, text: str) -> bool:
        if self._token_pattern is None:
            return False
        return any(match.group(0) in self._lookup for match in self._token_pattern.finditer(text))

    def restore(self, html: str) -> str:
        if self._token_pattern is None:
            return html
        # Literal placeholder-shaped text that was never minted stays as it is.
        return self._token_pattern.sub(lambda match: self._lookup.get(match.group(0), match.group(0)), html)

    def _mint(self, taken: set[str]) -> str:
        while True:
            self._counter += 1
            token = f"{self.prefix}{self._counter}_"
            if token not in taken:
                return token
