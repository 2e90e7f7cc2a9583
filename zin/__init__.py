"""zin - a small modal text editor for the terminal."""

from .buffer import Position, Selection, TextBuffer
from .controller import ModeController
from .highlighter import Category, Highlighter, Token
from .modes import Mode
from .session import EditorSession
from .viewport import Viewport

__all__ = [
    'Category',
    'EditorSession',
    'Highlighter',
    'Mode',
    'ModeController',
    'Position',
    'Selection',
    'TextBuffer',
    'Token',
    'Viewport',
]
