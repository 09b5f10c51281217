"""Grapheme-indexed lines of text.

All column arithmetic in the viewer counts extended grapheme clusters, so a
flag emoji or an ``e`` followed by a combining accent occupies one column
index. Slicing never splits a cluster.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import regex

_GRAPHEME = regex.compile(r"\X")


def graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


@dataclass(frozen=True)
class Line:
    """One logical row of a document.

    Attributes:
        text: The row's text, without its line terminator.
        grapheme_count: Number of extended grapheme clusters in ``text``.
    """
    text: str
    grapheme_count: int
    _clusters: tuple[str, ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self):
        if self.text and not self._clusters:
            object.__setattr__(self, '_clusters', tuple(graphemes(self.text)))

    @classmethod
    def from_text(cls, raw: str) -> 'Line':
        """Build a line from raw text, counting its grapheme clusters."""
        clusters = tuple(graphemes(raw))
        return cls(text="".join(clusters), grapheme_count=len(clusters), _clusters=clusters)

    def display(self) -> str:
        """Return the full text."""
        return self.text

    def display_range(self, start: int, end: int) -> str:
        """Return graphemes ``[start, end)``.

        Out-of-range input degrades instead of raising: ``end < start`` or
        ``start >= length()`` give an empty string, ``end`` past the end is
        clamped and negative bounds count as 0.
        """
        start = max(0, start)
        end = min(max(0, end), self.grapheme_count)
        if start >= end:
            return ""
        return "".join(self._clusters[start:end])

    def length(self) -> int:
        """Number of grapheme clusters; the unit for every column index."""
        return self.grapheme_count

    def byte_length(self) -> int:
        # UTF-8 size, diagnostics only
        return len(self.text.encode("utf-8"))

    def is_empty(self) -> bool:
        return self.grapheme_count == 0

    def __len__(self) -> int:
        return self.grapheme_count

    def __str__(self) -> str:
        return self.text
