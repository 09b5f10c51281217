"""Exception types raised by the viewer."""


class SkimError(Exception):
    """Base class for all viewer errors."""


class LoadError(SkimError):
    """The document could not be opened or decoded as text."""


class ConfigError(SkimError):
    """The settings file exists but could not be read or is malformed."""


class TerminalAcquisitionError(SkimError):
    """Raw mode or the alternate screen could not be entered."""


class RenderError(SkimError):
    """Writing to or querying the terminal failed mid-frame."""


class InputError(SkimError):
    """Reading a key event from the terminal failed."""


class HighlightError(SkimError):
    """A line could not be highlighted; callers fall back to plain text."""


class UnsupportedLanguage(HighlightError):
    """No lexer matches the document's language tag."""

    def __init__(self, language_tag: str):
        self.language_tag = language_tag
        super().__init__(f"No syntax found for '{language_tag}'")


class ThemeMissing(HighlightError):
    """The configured theme is not a known style."""

    def __init__(self, theme: str):
        self.theme = theme
        super().__init__(f"Theme not found: {theme}")
