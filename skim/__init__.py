"""skim - a terminal viewer for text files."""

from .content import Line
from .document import Document
from .highlight import HighlightAdapter, SpanStyle, StyledSpan
from .viewport import Direction, Position, Viewport
from .renderer import Renderer
from .viewer import SessionState, Viewer

__all__ = [
    'Line',
    'Document',
    'HighlightAdapter',
    'SpanStyle',
    'StyledSpan',
    'Direction',
    'Position',
    'Viewport',
    'Renderer',
    'SessionState',
    'Viewer',
]
