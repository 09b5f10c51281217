"""Viewport geometry: terminal size, scroll offset and cursor position.

Coordinates are (column, row) in document space. Columns count grapheme
clusters (see :mod:`skim.content`). The screen position of the cursor is
``cursor - offset``; keeping the cursor inside the visible window is done
by :meth:`Viewport.scroll_to_cursor`, which the renderer calls once per
frame. Moving the cursor never scrolls by itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .constants import ViewerConstants
from .document import Document


@dataclass
class Position:
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"(x: {self.x}, y: {self.y})"


class Direction(Enum):
    """Cursor movement directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Viewport:
    """Visible window onto a document.

    Attributes:
        width: Visible columns.
        height: Visible content rows (status rows excluded).
        offset: Document position shown at the top-left of the window.
        cursor: Cursor position in document coordinates.
    """
    width: int
    height: int
    offset: Position = field(default_factory=Position)
    cursor: Position = field(default_factory=Position)

    def __post_init__(self):
        self.width = max(0, self.width)
        self.height = max(0, self.height)

    @classmethod
    def from_terminal_size(cls, width: int, height: int) -> 'Viewport':
        """Create a viewport for a terminal of ``width`` x ``height`` cells.

        The rows reserved for the status bar and hint line are subtracted;
        a terminal shorter than that yields an empty viewport.
        """
        return cls(width=width, height=height - ViewerConstants.STATUS_BAR_ROWS)

    def resize(self, width: int, height: int) -> None:
        """Apply a new terminal size. Offset and cursor are kept."""
        self.width = max(0, width)
        self.height = max(0, height - ViewerConstants.STATUS_BAR_ROWS)

    def move_cursor(self, direction: Direction, document: Document) -> None:
        """Move the cursor one step.

        The column is first clamped to the width of the cursor's row. After
        the move, only the lower bound (0) is enforced: a right move from
        the end of a row leaves the cursor one column past it, and a down
        move from the last row can reach ``row_count() + 1``.
        """
        x, y = self.cursor.x, self.cursor.y
        row = document.row(y)
        row_width = row.length() if row is not None else 0

        if x > row_width:
            x = row_width

        if direction is Direction.DOWN:
            if y > document.row_count():
                y = document.row_count()
            y += 1
        elif direction is Direction.UP:
            y = max(0, y - 1)
        elif direction is Direction.LEFT:
            x = max(0, x - 1)
        elif direction is Direction.RIGHT:
            x += 1

        self.cursor = Position(x, y)

    def scroll_to_cursor(self) -> None:
        """Scroll the minimal amount that brings the cursor into view."""
        if self.height > 0:
            if self.cursor.y < self.offset.y:
                self.offset.y = self.cursor.y
            elif self.cursor.y >= self.offset.y + self.height:
                self.offset.y = self.cursor.y - self.height + 1
        if self.width > 0:
            if self.cursor.x < self.offset.x:
                self.offset.x = self.cursor.x
            elif self.cursor.x >= self.offset.x + self.width:
                self.offset.x = self.cursor.x - self.width + 1
        self.offset.x = max(0, self.offset.x)
        self.offset.y = max(0, self.offset.y)

    def visible_row_span(self) -> tuple[int, int]:
        """Return (first_row, last_row_exclusive) in document rows."""
        return (self.offset.y, self.offset.y + self.height)

    def visible_col_span(self) -> tuple[int, int]:
        """Return (first_col, last_col_exclusive) in grapheme columns."""
        return (self.offset.x, self.offset.x + self.width)

    def screen_cursor(self) -> Position:
        """Cursor position relative to the window, clamped to its bounds."""
        x = min(max(0, self.cursor.x - self.offset.x), max(0, self.width - 1))
        y = min(max(0, self.cursor.y - self.offset.y), max(0, self.height - 1))
        return Position(x, y)

    def __str__(self) -> str:
        return (f"(width: {self.width}, height: {self.height}, "
                f"scroll_offset: {self.offset}, cursor_position: {self.cursor})")
