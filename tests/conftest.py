"""Shared fixtures: an in-memory terminal that records what is drawn."""

import pytest

from skim.errors import InputError


class MockTerminal:
    """Stands in for TerminalInterface.

    Writes land on a character grid so tests can read back screen rows;
    non-plain styles are recorded in ``styled_spans`` rather than emitted.
    """

    def __init__(self, width=80, height=24, keys=()):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.title = None
        self.ops = []
        self.styled_spans = []
        self.setup_calls = 0
        self.cleanup_calls = 0
        self._row = 0
        self._col = 0
        self.grid = [[' '] * width for _ in range(height)]

    def __enter__(self):
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()

    def setup(self):
        self.setup_calls += 1
        self.ops.append(('setup',))

    def cleanup(self):
        self.cleanup_calls += 1
        self.ops.append(('cleanup',))

    def size(self):
        return (self.width, self.height)

    def move(self, row, col):
        self.ops.append(('move', row, col))
        self._row, self._col = row, col

    def write(self, text):
        self.ops.append(('write', text))
        for ch in text:
            if 0 <= self._row < self.height and 0 <= self._col < self.width:
                self.grid[self._row][self._col] = ch
            self._col += 1

    def clear_line(self):
        self.ops.append(('clear_line', self._row))
        if 0 <= self._row < self.height:
            for col in range(self._col, self.width):
                self.grid[self._row][col] = ' '

    def hide_cursor(self):
        self.ops.append(('hide_cursor',))

    def show_cursor(self):
        self.ops.append(('show_cursor',))

    def flush(self):
        self.ops.append(('flush',))

    def styled(self, text, style):
        if not style.is_plain:
            self.styled_spans.append((self._row, text, style))
        return text

    def reverse(self, text):
        self.ops.append(('reverse', text))
        return text

    def get_key(self):
        if not self.keys:
            raise InputError("No more keys")
        return self.keys.pop(0)

    def screen_line(self, row):
        return ''.join(self.grid[row]).rstrip()

    @property
    def cursor(self):
        """Last (row, col) the cursor was moved to."""
        moves = [op for op in self.ops if op[0] == 'move']
        return moves[-1][1:] if moves else None


@pytest.fixture
def make_terminal():
    """Factory for MockTerminal instances."""
    return MockTerminal
