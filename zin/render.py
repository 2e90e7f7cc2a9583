"""What the terminal backend draws: one Frame per screen update."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants
from .highlighter import Category, Highlighter, Token
from .modes import CommandState, Mode, VisualState
from .session import EditorSession


@dataclass
class Frame:
    """Everything needed to draw the screen, in window coordinates.

    Attributes:
        rows: Highlighted tokens for each visible text row
        selections: Per-row (start_col, end_col) of the visual selection, or None
        cursor_y: Cursor row relative to the top of the window
        cursor_x: Cursor column
        status: Text of the command line (the command being typed in Command mode)
        mode: The active mode
        name: Buffer name shown in the status bar
        modified: Whether the buffer has unsaved changes
    """
    rows: list[list[Token]]
    cursor_y: int
    cursor_x: int
    status: str
    mode: Mode
    name: str = ""
    modified: bool = False
    selections: list[Optional[tuple[int, int]]] = field(default_factory=list)

    @property
    def mode_label(self) -> str:
        return self.mode.label


def selection_ranges(session: EditorSession) -> list[Optional[tuple[int, int]]]:
    """Column ranges of the visual selection on each visible row."""
    visible = session.viewport.visible_rows
    top = session.viewport.top_row
    ranges: list[Optional[tuple[int, int]]] = [None] * visible
    if not isinstance(session.state, VisualState):
        return ranges
    start, end = session.state.selection.ordered()
    lines = session.buffer.lines
    for y in range(visible):
        row = top + y
        if row >= len(lines) or not start.row <= row <= end.row:
            continue
        if start.row == end.row:
            lo, hi = start.col, end.col
        elif row == start.row:
            lo, hi = start.col, len(lines[row])
        elif row == end.row:
            lo, hi = 0, end.col
        else:
            lo, hi = 0, len(lines[row])
        ranges[y] = (lo, hi)
    return ranges


def build_frame(session: EditorSession, highlighter: Highlighter) -> Frame:
    """Pull the visible part of the session into a Frame.

    Rows past the end of the document show a '~' marker.
    """
    viewport = session.viewport
    lines = session.buffer.lines
    rows: list[list[Token]] = []
    for row in range(viewport.top_row, viewport.top_row + viewport.visible_rows):
        if row < len(lines):
            rows.append(highlighter.highlight_line(lines[row]))
        else:
            rows.append([Token(Category.PLAIN, EditorConstants.EMPTY_ROW_MARKER)])

    if isinstance(session.state, CommandState):
        status = session.state.text
    else:
        status = session.status

    cursor_y, cursor_x = viewport.relative_cursor()
    return Frame(
        rows=rows,
        cursor_y=cursor_y,
        cursor_x=cursor_x,
        status=status,
        mode=session.mode,
        name=session.buffer.name or "",
        modified=session.buffer.modified,
        selections=selection_ranges(session),
    )
