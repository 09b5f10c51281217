"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import termios
from typing import Optional

import blessed

from .constants import ViewerConstants
from .errors import InputError, RenderError, TerminalAcquisitionError
from .highlight import SpanStyle

logger = logging.getLogger(__name__)


def _rgb(hex_color: str) -> tuple[int, int, int]:
    value = int(hex_color.lstrip('#')[:6], 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


class TerminalInterface:
    """Owns the terminal: mode changes, output and key input.

    Output is buffered and written in one go by :meth:`flush`. Use as a
    context manager to pair :meth:`setup` with :meth:`cleanup`::

        with TerminalInterface() as terminal:
            ...
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._buffer: list[str] = []
        self.title: Optional[str] = None

    def __enter__(self) -> 'TerminalInterface':
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def setup(self) -> None:
        """Enter the alternate screen and raw mode.

        Raises:
            TerminalAcquisitionError: If stdout is not a terminal or a mode
                cannot be entered. Whatever was already changed is undone.
        """
        if not self.term.is_a_tty:
            raise TerminalAcquisitionError("Output is not a terminal")
        try:
            self._emit(self.term.enter_fullscreen)
            self.is_fullscreen = True
            from curtsies import Input
            # Entering the Input context switches the tty out of line mode
            curtsies_input = Input(keynames='curtsies')
            curtsies_input.__enter__()
            self._curtsies_input = curtsies_input
            self._emit(ViewerConstants.CURSOR_BLINKING_BAR)
            self._emit(ViewerConstants.ENABLE_MOUSE_CAPTURE)
            if self.title:
                self._emit(ViewerConstants.SET_TITLE.format(self.title))
            self._emit(self.term.clear)
        except (OSError, termios.error, ImportError, RenderError) as e:
            # termios.error is raised when stdin is not a tty
            self.cleanup()
            raise TerminalAcquisitionError(f"Cannot acquire terminal: {e}") from e
        logger.debug("Terminal acquired (%dx%d)", *self.size())

    def cleanup(self) -> None:
        """Restore the terminal. Safe to call when nothing was acquired.

        Every step is attempted even if an earlier one fails; failures are
        logged, not retried.
        """
        if not self.is_fullscreen and self._curtsies_input is None:
            return
        self._buffer.clear()
        steps = [
            ("restore cursor style", lambda: self._emit(ViewerConstants.CURSOR_STEADY_BAR)),
            ("disable mouse capture", lambda: self._emit(ViewerConstants.DISABLE_MOUSE_CAPTURE)),
            ("leave alternate screen", self._leave_fullscreen),
            ("leave raw mode", self._leave_raw_mode),
            ("clear screen", lambda: self._emit(self.term.clear)),
        ]
        for name, step in steps:
            try:
                step()
            except (OSError, termios.error, RenderError) as e:
                logger.warning("Terminal release step '%s' failed: %s", name, e)
        logger.debug("Terminal released")

    def _leave_fullscreen(self) -> None:
        if self.is_fullscreen:
            self.is_fullscreen = False
            self._emit(self.term.exit_fullscreen + self.term.normal_cursor)

    def _leave_raw_mode(self) -> None:
        curtsies_input, self._curtsies_input = self._curtsies_input, None
        if curtsies_input is not None:
            curtsies_input.__exit__(None, None, None)

    def _emit(self, text: str) -> None:
        """Write immediately, bypassing the frame buffer."""
        try:
            self.term.stream.write(text)
            self.term.stream.flush()
        except OSError as e:
            raise RenderError(f"Terminal write failed: {e}") from e

    def size(self) -> tuple[int, int]:
        """Terminal (width, height) in character cells."""
        try:
            return self.term.width, self.term.height
        except OSError as e:
            raise RenderError(f"Cannot query terminal size: {e}") from e

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def move(self, row: int, col: int) -> None:
        self._buffer.append(self.term.move_yx(row, col))

    def clear_line(self) -> None:
        """Clear from the cursor to the end of the line."""
        self._buffer.append(self.term.clear_eol)

    def hide_cursor(self) -> None:
        self._buffer.append(self.term.hide_cursor)

    def show_cursor(self) -> None:
        self._buffer.append(self.term.normal_cursor)

    def flush(self) -> None:
        """Write the buffered frame to the terminal."""
        frame = ''.join(self._buffer)
        self._buffer.clear()
        self._emit(frame)

    def styled(self, text: str, style: SpanStyle) -> str:
        """Wrap text in the escape sequences for ``style``."""
        prefix = []
        if style.color:
            prefix.append(self.term.color_rgb(*_rgb(style.color)))
        if style.bgcolor:
            prefix.append(self.term.on_color_rgb(*_rgb(style.bgcolor)))
        if style.bold:
            prefix.append(self.term.bold)
        if style.italic:
            prefix.append(self.term.italic)
        if style.underline:
            prefix.append(self.term.underline)
        if not prefix:
            return text
        return ''.join(prefix) + text + self.term.normal

    def reverse(self, text: str) -> str:
        return self.term.reverse + text + self.term.normal

    def get_key(self) -> str:
        """Block until a key arrives and return its curtsies name.

        Raises:
            InputError: If input is not active or the read fails.
        """
        if self._curtsies_input is None:
            raise InputError("Terminal input is not active")
        try:
            return str(next(self._curtsies_input))
        except (OSError, StopIteration) as e:
            raise InputError(f"Cannot read key: {e}") from e
