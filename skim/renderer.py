"""Frame composition.

A frame is drawn top to bottom: the status bar on screen row 0, one screen
row per viewport row starting at ``ViewerConstants.CONTENT_TOP``, an
optional line-number column overlaid at the right edge, and the hint line
on the last screen row. Everything goes through the terminal interface's
buffer and reaches the terminal in a single flush.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .config import Settings
from .constants import ViewerConstants
from .content import Line
from .document import Document
from .errors import HighlightError
from .highlight import HighlightAdapter, StyledSpan
from .version import get_version
from .viewport import Viewport

logger = logging.getLogger(__name__)

# C0 controls, DEL and C1 controls would act on the terminal if written raw
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def _control_picture(match: re.Match) -> str:
    code = ord(match.group())
    if code < 0x20:
        return chr(0x2400 + code)
    if code == 0x7f:
        return "\u2421"
    return "\ufffd"


def printable(text: str) -> str:
    """Replace control characters with visible one-column placeholders.

    C0 controls and DEL become their Unicode control pictures (a tab shows
    as U+2409) and C1 controls become U+FFFD, so column counts are unchanged.
    """
    return _CONTROL_CHARS.sub(_control_picture, text)


def center(text: str, width: int) -> str:
    """Center text in ``width`` columns, padding the left side first.

    The left pad is ``(width - len(text)) // 2``, so odd remainders put the
    extra space on the right. The result is exactly ``width`` long.
    """
    pad = max(0, (width - len(text)) // 2)
    return (" " * pad + text)[:width].ljust(width)


def line_number_width(row_count: int) -> int:
    """Columns needed for the largest label of a document, trailing space included."""
    return max(ViewerConstants.LINE_NUMBER_WIDTH, len(str(row_count)) + 1)


def line_number_label(index: int, width: int = ViewerConstants.LINE_NUMBER_WIDTH) -> str:
    """Right-aligned 1-based label for document row ``index``.

    Labels longer than ``width`` are returned whole rather than cut.
    """
    return f"{index + 1:>{width - 1}} "


class Renderer:
    """Draws frames for a document and viewport."""

    def __init__(self, terminal, highlighter: HighlightAdapter, settings: Settings,
                 version: Optional[str] = None):
        self.terminal = terminal
        self.highlighter = highlighter
        self.settings = settings
        self.version = version or get_version()

    def render(self, document: Document, viewport: Viewport) -> None:
        """Draw one frame.

        Raises:
            RenderError: If the terminal cannot be queried or written.
        """
        width, height = self.terminal.size()
        viewport.resize(width, height)
        viewport.scroll_to_cursor()

        self.terminal.hide_cursor()
        if height > 0:
            self._draw_status_bar(document, width)
        self._draw_rows(document, viewport)
        if self.settings.line_numbers:
            self._draw_line_numbers(document, viewport)
        if height > 1:
            self._draw_hint_line(document, viewport, width, height - 1)

        cursor = viewport.screen_cursor()
        self.terminal.move(ViewerConstants.CONTENT_TOP + cursor.y, cursor.x)
        self.terminal.show_cursor()
        self.terminal.flush()

    def status_text(self, document: Document) -> str:
        return ViewerConstants.STATUS_TEMPLATE.format(
            program=ViewerConstants.PROGRAM_NAME,
            version=self.version,
            name=document.display_name,
        )

    def compose_row(self, line: Line, viewport: Viewport, language_tag: str) -> list[StyledSpan]:
        """Styled spans for the visible part of one line.

        Highlighting failures degrade to a single plain span. Control
        characters are shown as placeholders, never sent to the terminal.
        """
        first_col, last_col = viewport.visible_col_span()
        text = line.display_range(first_col, last_col)
        try:
            spans = self.highlighter.highlight(text, language_tag)
        except HighlightError as e:
            self.highlighter.report_failure(e)
            spans = self.highlighter.plain(text)
        return [StyledSpan(printable(span.text), span.style) for span in spans]

    def _draw_status_bar(self, document: Document, width: int) -> None:
        self.terminal.move(0, 0)
        self.terminal.write(self.terminal.reverse(center(self.status_text(document), width)))

    def _draw_rows(self, document: Document, viewport: Viewport) -> None:
        first_row, _ = viewport.visible_row_span()
        for r in range(viewport.height):
            self.terminal.move(ViewerConstants.CONTENT_TOP + r, 0)
            self.terminal.clear_line()
            line = document.row(first_row + r)
            if line is None:
                self.terminal.write(ViewerConstants.EMPTY_ROW_MARKER)
                continue
            spans = self.compose_row(line, viewport, document.language_tag)
            self.terminal.write(''.join(self.terminal.styled(span.text, span.style) for span in spans))

    def _draw_line_numbers(self, document: Document, viewport: Viewport) -> None:
        label_width = line_number_width(document.row_count())
        column = viewport.width - label_width
        if column < 0:
            return
        first_row, last_row = viewport.visible_row_span()
        for index in range(first_row, min(last_row, document.row_count())):
            self.terminal.move(ViewerConstants.CONTENT_TOP + index - first_row, column)
            self.terminal.clear_line()
            self.terminal.write(line_number_label(index, label_width))

    def _draw_hint_line(self, document: Document, viewport: Viewport, width: int, row: int) -> None:
        position = ViewerConstants.POSITION_TEMPLATE.format(
            line=viewport.cursor.y + 1, column=viewport.cursor.x + 1)
        if document.language_tag:
            position += f"  [{document.language_tag}]"
        hint = ViewerConstants.HINT_TEXT + " "
        gap = max(1, width - len(position) - len(hint))
        self.terminal.move(row, 0)
        self.terminal.clear_line()
        self.terminal.write((position + " " * gap + hint)[:width])
