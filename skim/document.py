"""Read-only documents loaded from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .constants import ViewerConstants
from .content import Line
from .errors import LoadError

logger = logging.getLogger(__name__)


def language_tag_for(source_name: Optional[str]) -> str:
    """Return the file extension without its dot, or "" if there is none."""
    if not source_name:
        return ""
    return Path(source_name).suffix[1:]


def split_rows(content: str) -> list[str]:
    """Split file content into rows.

    Rows end at ``\\n``; a ``\\r`` left at the end of a row (CRLF files) is
    dropped. A final newline terminates the last row rather than starting
    an empty one, so ``"a\\nb"`` and ``"a\\nb\\n"`` both give two rows and an
    empty file gives none.
    """
    if not content:
        return []
    rows = content.split("\n")
    if rows[-1] == "":
        rows.pop()
    return [row[:-1] if row.endswith("\r") else row for row in rows]


class Document:
    """An ordered, immutable sequence of lines plus a language tag."""

    def __init__(self, lines: Iterable[Line], source_name: Optional[str] = None,
                 language_tag: str = ""):
        self._lines: tuple[Line, ...] = tuple(lines)
        self.source_name = source_name
        self._language_tag = language_tag

    @classmethod
    def load(cls, source_name: Union[str, Path]) -> 'Document':
        """Load a UTF-8 text file.

        Raises:
            LoadError: If the file cannot be opened or is not valid UTF-8.
        """
        name = str(source_name)
        try:
            with open(name, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise LoadError(f"Cannot decode {name} as UTF-8: {e.reason}") from e
        except OSError as e:
            raise LoadError(f"Cannot open {name}: {e.strerror or e}") from e

        document = cls.from_lines(split_rows(content), source_name=name,
                                  language_tag=language_tag_for(name))
        logger.info("Loaded %s: %d rows, language '%s'",
                    name, document.row_count(), document.language_tag)
        return document

    @classmethod
    def from_lines(cls, rows: Iterable[str], source_name: Optional[str] = None,
                   language_tag: str = "") -> 'Document':
        """Build a document from already-split rows of text."""
        return cls((Line.from_text(row) for row in rows), source_name, language_tag)

    def row(self, index: int) -> Optional[Line]:
        """Return the line at ``index``, or None past the end."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def row_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._lines

    @property
    def language_tag(self) -> str:
        return self._language_tag

    @property
    def display_name(self) -> str:
        """Name shown in the status bar and window title."""
        return self.source_name or ViewerConstants.UNTITLED

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return (f"Document(source_name={self.source_name!r}, rows={len(self._lines)}, "
                f"language_tag={self._language_tag!r})")
