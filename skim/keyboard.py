"""Parsing of curtsies key names into key events for the viewer."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    REGULAR = "regular"  # a printable character
    CTRL = "ctrl"
    SPECIAL = "special"  # named keys and anything unrecognised


@dataclass
class KeyEvent:
    """One key press. ``value`` is the character, or the lowercase key name."""
    key_type: KeyType
    value: str
    raw: str  # as delivered by curtsies
    is_ctrl: bool = False


class KeyboardHandler:
    """Reads keys from a terminal interface and parses them."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self) -> Optional[KeyEvent]:
        """Block for the next key and parse it. None for an empty read."""
        key = self.terminal.get_key()
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name such as 'q', '<UP>' or '<Ctrl-q>'.

        Modified keys other than Ctrl-<letter> (for example '<Esc+LEFT>' or
        '<Shift-UP>') keep their full name, so they never match a plain
        arrow.
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            modifier, _, base = name.rpartition('-')
            if modifier == 'ctrl' and len(base) == 1:
                return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)
            if name in ('esc', 'escape'):
                name = 'escape'
            return KeyEvent(KeyType.SPECIAL, name, key_str)

        # Raw control bytes: 0x01 is Ctrl-A through 0x1a for Ctrl-Z
        if len(key_str) == 1 and 1 <= ord(key_str) <= 26:
            return KeyEvent(KeyType.CTRL, chr(ord('a') + ord(key_str) - 1), key_str, is_ctrl=True)
        if key_str == '\x1b':
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)
