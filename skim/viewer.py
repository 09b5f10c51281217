"""Main viewer controller: the render / input / navigate loop."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .config import Settings
from .constants import ViewerConstants
from .document import Document
from .errors import InputError, RenderError, SkimError
from .highlight import HighlightAdapter
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .renderer import Renderer
from .terminal import TerminalInterface
from .viewport import Direction, Viewport

logger = logging.getLogger(__name__)

ARROW_DIRECTIONS = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
}


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    TERMINATING = "terminating"


class Viewer:
    """Read-only file viewer application controller."""

    def __init__(self, document: Document, settings: Optional[Settings] = None,
                 terminal: Optional[TerminalInterface] = None,
                 highlighter: Optional[HighlightAdapter] = None):
        """Initialize the viewer components.

        Nothing touches the terminal until :meth:`run`.
        """
        self.document = document
        self.settings = settings or Settings()
        self.terminal = terminal or TerminalInterface()
        self.terminal.title = f"{ViewerConstants.PROGRAM_NAME} - {document.display_name}"
        self.keyboard = KeyboardHandler(self.terminal)
        self.highlighter = highlighter or HighlightAdapter(self.settings.theme)
        self.renderer = Renderer(self.terminal, self.highlighter, self.settings)
        self.viewport: Optional[Viewport] = None
        self.state = SessionState.UNINITIALIZED
        self.error: Optional[SkimError] = None

    @classmethod
    def open(cls, path: Union[str, Path], settings: Optional[Settings] = None, **kwargs) -> 'Viewer':
        """Load ``path`` and build a viewer for it.

        Raises:
            LoadError: Before any terminal state is changed.
        """
        return cls(Document.load(path), settings, **kwargs)

    def run(self) -> int:
        """Run the viewer until quit or a runtime error.

        Returns:
            0 after a quit, 1 after a runtime error. The terminal is
            restored before this returns or raises.

        Raises:
            TerminalAcquisitionError: If the terminal cannot be set up.
        """
        with self.terminal:
            self.viewport = Viewport.from_terminal_size(*self.terminal.size())
            self.state = SessionState.ACTIVE
            logger.info("Viewing %s in %s", self.document.display_name, self.viewport)
            try:
                self._loop()
            except KeyboardInterrupt:
                logger.info("Interrupted")
            finally:
                self.state = SessionState.TERMINATING

        if self.error is not None:
            return 1
        return 0

    def _loop(self) -> None:
        while self.state is SessionState.ACTIVE:
            try:
                self.renderer.render(self.document, self.viewport)
                key_event = self.keyboard.get_key_event()
            except (RenderError, InputError) as e:
                logger.error("Terminating after error: %s", e)
                self.error = e
                self.state = SessionState.TERMINATING
                return
            if key_event:
                self._handle_key_event(key_event)

    def _handle_key_event(self, key_event: KeyEvent) -> None:
        """Apply one key event: quit, move the cursor, or ignore it."""
        if self._is_quit_key(key_event):
            logger.debug("Quit requested")
            self.state = SessionState.TERMINATING
            return
        direction = ARROW_DIRECTIONS.get(key_event.value)
        if key_event.key_type == KeyType.SPECIAL and direction is not None:
            self.viewport.move_cursor(direction, self.document)
            logger.debug("Cursor %s -> %s", direction.value, self.viewport.cursor)

    @staticmethod
    def _is_quit_key(key_event: KeyEvent) -> bool:
        if key_event.key_type == KeyType.REGULAR:
            return key_event.value in ViewerConstants.QUIT_KEYS
        if key_event.key_type == KeyType.CTRL:
            return key_event.value in ViewerConstants.QUIT_CTRL_KEYS
        return False
