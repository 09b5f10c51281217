"""Settings loading.

Settings live in a TOML file::

    [appearance]
    theme = "monokai"

    [editor]
    line_numbers = true

The first file found is used: an explicit path, ``$SKIM_CONFIG``,
``./skim.toml``, then ``config.toml`` in the user config directory. With
no file the defaults apply. A file that exists but cannot be parsed is a
:class:`~skim.errors.ConfigError`; it is never silently replaced by
defaults.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from platformdirs import user_config_dir

from .constants import ViewerConstants
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Read-only viewer settings."""
    theme: str = ViewerConstants.DEFAULT_THEME
    line_numbers: bool = False


def get_config_dir() -> Path:
    """Get the skim config directory."""
    return Path(user_config_dir(ViewerConstants.PROGRAM_NAME))


def find_config_file() -> Optional[Path]:
    """Return the first settings file that exists, if any."""
    candidates = []
    if override := os.environ.get(ViewerConstants.CONFIG_ENV_VAR):
        candidates.append(Path(override))
    candidates.append(Path.cwd() / ViewerConstants.CONFIG_FILE_NAME)
    candidates.append(get_config_dir() / ViewerConstants.USER_CONFIG_FILE_NAME)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, returning defaults when no settings file exists.

    Args:
        path: Explicit settings file. It must exist.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or a
            value has the wrong type.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Settings file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path is None:
            logger.debug("No settings file found, using defaults")
            return Settings()

    try:
        data: dict[str, Any] = tomllib.loads(config_path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed settings in {config_path}: {e}") from e

    settings = settings_from_dict(data, source=str(config_path))
    logger.info("Loaded settings from %s: %s", config_path, settings)
    return settings


def settings_from_dict(data: dict[str, Any], source: str = "<settings>") -> Settings:
    """Build Settings from parsed TOML data. Unknown keys are ignored."""
    appearance = _section(data, "appearance", source)
    editor = _section(data, "editor", source)

    theme = appearance.get("theme", ViewerConstants.DEFAULT_THEME)
    if not isinstance(theme, str) or not theme.strip():
        raise ConfigError(f"{source}: appearance.theme must be a non-empty string")

    line_numbers = editor.get("line_numbers", False)
    if not isinstance(line_numbers, bool):
        raise ConfigError(f"{source}: editor.line_numbers must be true or false")

    return Settings(theme=theme, line_numbers=line_numbers)


def _section(data: dict[str, Any], name: str, source: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"{source}: [{name}] must be a table")
    return section
