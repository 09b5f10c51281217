"""Syntax highlighting of single lines using Pygments.

The adapter is built once per session: the style is resolved on first use
and one lexer is cached per language tag, so rendering a frame does not
rebuild any Pygments machinery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import HighlightError, ThemeMissing, UnsupportedLanguage

logger = logging.getLogger(__name__)

# Keep Pygments from adding or stripping newlines so spans round-trip
_LEXER_OPTIONS = {"stripnl": False, "stripall": False, "ensurenl": False}


@dataclass(frozen=True)
class SpanStyle:
    """Color and attributes for a run of text. ``SpanStyle()`` is plain."""
    color: Optional[str] = None  # "rrggbb"
    bgcolor: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_plain(self) -> bool:
        return self == PLAIN


PLAIN = SpanStyle()


@dataclass(frozen=True)
class StyledSpan:
    text: str
    style: SpanStyle = PLAIN


class HighlightAdapter:
    """Turns a line of text into styled spans for one theme."""

    def __init__(self, theme: str):
        self.theme = theme
        self._style: Optional[StyleMeta] = None
        self._lexers: dict[str, Lexer] = {}
        self._span_styles: dict = {}
        self._reported: set[str] = set()

    def highlight(self, line_text: str, language_tag: str) -> list[StyledSpan]:
        """Highlight one line.

        Returns spans whose texts concatenate to exactly ``line_text``.

        Raises:
            ThemeMissing: The theme is not a Pygments style.
            UnsupportedLanguage: No lexer matches ``language_tag``.
            HighlightError: The lexer altered the text.
        """
        style = self._resolve_style()
        lexer = self._resolve_lexer(language_tag)

        spans: list[StyledSpan] = []
        for token_type, value in lexer.get_tokens(line_text):
            if not value:
                continue
            span_style = self._span_style(style, token_type)
            if spans and spans[-1].style == span_style:
                spans[-1] = StyledSpan(spans[-1].text + value, span_style)
            else:
                spans.append(StyledSpan(value, span_style))

        if "".join(span.text for span in spans) != line_text:
            raise HighlightError(f"Lexer for '{language_tag}' altered the line text")
        return spans

    @staticmethod
    def plain(line_text: str) -> list[StyledSpan]:
        """Fallback rendering: the whole line in the plain style."""
        return [StyledSpan(line_text, PLAIN)] if line_text else []

    def report_failure(self, error: HighlightError) -> None:
        """Log a highlighting failure, once per distinct message."""
        message = str(error)
        if message in self._reported:
            logger.debug("Plain rendering: %s", message)
            return
        self._reported.add(message)
        logger.warning("Falling back to plain text: %s", message)

    def _resolve_style(self) -> StyleMeta:
        if self._style is None:
            try:
                self._style = get_style_by_name(self.theme.strip().lower())
            except ClassNotFound as e:
                raise ThemeMissing(self.theme) from e
            logger.debug("Resolved theme %s", self.theme)
        return self._style

    def _resolve_lexer(self, language_tag: str) -> Lexer:
        lexer = self._lexers.get(language_tag)
        if lexer is not None:
            return lexer
        if not language_tag:
            raise UnsupportedLanguage(language_tag)
        try:
            lexer = get_lexer_by_name(language_tag, **_LEXER_OPTIONS)
        except ClassNotFound:
            try:
                lexer = get_lexer_for_filename(f"file.{language_tag}", **_LEXER_OPTIONS)
            except ClassNotFound as e:
                raise UnsupportedLanguage(language_tag) from e
        logger.debug("Using lexer %s for '%s'", lexer.name, language_tag)
        self._lexers[language_tag] = lexer
        return lexer

    def _span_style(self, style: StyleMeta, token_type) -> SpanStyle:
        cached = self._span_styles.get(token_type)
        if cached is None:
            attrs = style.style_for_token(token_type)
            cached = SpanStyle(
                color=attrs.get("color") or None,
                bgcolor=attrs.get("bgcolor") or None,
                bold=bool(attrs.get("bold")),
                italic=bool(attrs.get("italic")),
                underline=bool(attrs.get("underline")),
            )
            self._span_styles[token_type] = cached
        return cached
