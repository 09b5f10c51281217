"""skim CLI entry point.

Allows running via `python -m skim` and provides the console script
defined in `pyproject.toml`.

Usage:
    skim PATH
    skim --file PATH [--config SETTINGS.toml]
    skim --version

Controls:
    Arrow keys: Move the cursor
    q, Ctrl-Q: Quit
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from platformdirs import user_log_dir

from .constants import ViewerConstants
from .errors import SkimError
from .version import get_version_string

logger = logging.getLogger("skim")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2

USAGE = "usage: skim [--config SETTINGS] (PATH | --file PATH)"
CONTROLS = "controls: arrow keys move the cursor, q or Ctrl-Q quits"


class UsageError(Exception):
    """Command line arguments could not be parsed."""


def parse_args(args: list[str]) -> tuple[str, Optional[str]]:
    """Return (path, config_path) from the command line arguments.

    Raises:
        UsageError: On a missing path, a missing option value or an unknown option.
    """
    path: Optional[str] = None
    config: Optional[str] = None
    it = iter(args)
    for arg in it:
        if arg in ('--file', '-f', '--config', '-c'):
            value = next(it, None)
            if value is None:
                raise UsageError(f"{arg} requires a value")
            if arg in ('--file', '-f'):
                path = value
            else:
                config = value
        elif arg.startswith('--file='):
            path = arg.split('=', 1)[1]
        elif arg.startswith('--config='):
            config = arg.split('=', 1)[1]
        elif arg.startswith('-') and arg != '-':
            raise UsageError(f"unknown option {arg}")
        elif path is None:
            path = arg
        else:
            raise UsageError(f"unexpected argument {arg}")
    if not path:
        raise UsageError("missing file to view")
    return path, config


def default_log_file() -> Path:
    return Path(user_log_dir(ViewerConstants.PROGRAM_NAME)) / ViewerConstants.LOG_FILE_NAME


def setup_logging() -> None:
    """Send log records to the log file; the terminal belongs to the viewer."""
    log_file = Path(os.environ.get(ViewerConstants.LOG_FILE_ENV_VAR) or default_log_file())
    level_name = os.environ.get(ViewerConstants.LOG_LEVEL_ENV_VAR, "DEBUG").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.DEBUG
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    except OSError as e:
        print(f"skim: logging disabled, cannot open {log_file}: {e}", file=sys.stderr)
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(ViewerConstants.LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return EXIT_OK
    if args and args[0] in ("--help", "-h"):
        print(USAGE)
        print(CONTROLS)
        return EXIT_OK

    try:
        path, config_path = parse_args(args)
    except UsageError as e:
        print(USAGE, file=sys.stderr)
        print(f"skim: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging()
    logger.info("Starting %s", get_version_string())

    # Lazy import to avoid importing UI deps for --version
    from .config import load_settings
    from .viewer import Viewer
    try:
        settings = load_settings(config_path)
        viewer = Viewer.open(path, settings)
        status = viewer.run()
    except SkimError as e:
        logger.error("%s", e)
        print(f"skim: {e}", file=sys.stderr)
        return EXIT_ERROR

    if viewer.error is not None:
        print(f"skim: {viewer.error}", file=sys.stderr)
    logger.info("Exiting with status %d", status)
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
