"""Editing session state.

One EditorSession owns everything the mode handlers read and mutate: the
buffer, the cursor/viewport, the active mode and its transient state, the
search results and the yank stack. Handlers receive the session explicitly
instead of reaching for module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .buffer import TextBuffer
from .clipboard import Clipboard
from .config import Config
from .modes import Mode, ModeState, NormalState
from .search import MatchSet
from .syntax import PLAIN, SyntaxTable
from .viewport import Viewport


@dataclass
class EditorSession:
    buffer: TextBuffer
    viewport: Viewport = field(default_factory=Viewport)
    config: Config = field(default_factory=Config)
    syntax: SyntaxTable = PLAIN
    state: ModeState = field(default_factory=NormalState)
    matches: MatchSet = field(default_factory=MatchSet)
    clipboard: Clipboard = field(default_factory=Clipboard)
    status: str = ""
    running: bool = True

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def enter(self, state: ModeState) -> None:
        """Switch to another mode, discarding the old mode's state."""
        self.state = state

    def check_invariants(self) -> None:
        """Raise CoordinateError if the cursor left the document or window."""
        self.viewport.check(self.buffer)
