"""Constants and configuration for the skim viewer."""


class ViewerConstants:
    """Central configuration constants for the viewer."""

    PROGRAM_NAME = "skim"
    UNTITLED = "Untitled"

    # Screen layout: status bar on the first row, hint line on the last
    STATUS_BAR_ROWS = 2
    CONTENT_TOP = 1
    EMPTY_ROW_MARKER = "~"
    LINE_NUMBER_WIDTH = 5  # Right-aligned, overlaid at the right edge

    # Keys (curtsies-style names, parsed by KeyboardHandler)
    QUIT_KEYS = frozenset({"q"})
    QUIT_CTRL_KEYS = frozenset({"q"})

    # Terminal control sequences blessed has no capability name for
    CURSOR_BLINKING_BAR = "\x1b[5 q"
    CURSOR_STEADY_BAR = "\x1b[6 q"
    ENABLE_MOUSE_CAPTURE = "\x1b[?1000h\x1b[?1002h\x1b[?1015h\x1b[?1006h"
    DISABLE_MOUSE_CAPTURE = "\x1b[?1006l\x1b[?1015l\x1b[?1002l\x1b[?1000l"
    SET_TITLE = "\x1b]0;{}\x07"

    # Settings
    DEFAULT_THEME = "monokai"
    CONFIG_FILE_NAME = "skim.toml"
    USER_CONFIG_FILE_NAME = "config.toml"
    CONFIG_ENV_VAR = "SKIM_CONFIG"

    # Logging
    LOG_FILE_NAME = "skim.log"
    LOG_FILE_ENV_VAR = "SKIM_LOG_FILE"
    LOG_LEVEL_ENV_VAR = "SKIM_LOG_LEVEL"
    LOG_FORMAT = "[%(asctime)s %(levelname)s %(filename)s:%(lineno)d] %(message)s"

    # Messages
    STATUS_TEMPLATE = "{program} {version} - File: {name}"
    HINT_TEXT = "q to quit"
    POSITION_TEMPLATE = " Ln {line}, Col {column}"
