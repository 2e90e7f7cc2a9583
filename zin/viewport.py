"""Cursor position and the visible window onto the buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .buffer import CoordinateError, Position
from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import TextBuffer


class Viewport:
    """Tracks the cursor (row, col) and the first visible row.

    The bottom two terminal rows belong to the status bar and command line,
    so text occupies rows top_row .. top_row + visible_rows - 1. Moving up
    or down past the window edge scrolls by exactly one row.
    """

    def __init__(self, width: int = 80, height: int = 24):
        self.row = 0
        self.col = 0
        self.top_row = 0
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return (f"Viewport(row={self.row}, col={self.col}, top_row={self.top_row}, "
                f"width={self.width}, height={self.height})")

    @property
    def visible_rows(self) -> int:
        return max(1, self.height - EditorConstants.RESERVED_ROWS)

    @property
    def bottom_row(self) -> int:
        """Last document row that fits in the window."""
        return self.top_row + self.visible_rows - 1

    @property
    def cursor(self) -> Position:
        return Position(self.row, self.col)

    def relative_cursor(self) -> tuple[int, int]:
        """Cursor position relative to the top-left of the window."""
        return (self.row - self.top_row, self.col)

    # --- Movement ---

    def move_left(self):
        if self.col > 0:
            self.col -= 1

    def move_right(self, buffer: "TextBuffer"):
        if self.col < len(buffer.lines[self.row]):
            self.col += 1

    def move_up(self):
        if self.row == 0:
            return
        if self.row == self.top_row:
            self.top_row -= 1
        self.row -= 1

    def move_down(self, buffer: "TextBuffer"):
        if self.row + 1 >= len(buffer.lines):
            return
        if self.row >= self.bottom_row:
            self.top_row += 1
        self.row += 1

    def move(self, direction: str, buffer: "TextBuffer") -> bool:
        """Apply a directional key by name.

        Returns:
            True if direction was one of left/right/up/down
        """
        if direction == 'left':
            self.move_left()
        elif direction == 'right':
            self.move_right(buffer)
        elif direction == 'up':
            self.move_up()
        elif direction == 'down':
            self.move_down(buffer)
        else:
            return False
        return True

    def jump_to(self, position: Position):
        """Put the cursor on position and scroll it to the top of the window.

        Search jumps always land on the first text row, even when the match
        is already visible. The position is not checked against a buffer;
        call clamp() afterward if it may be stale.
        """
        self.row = position.row
        self.col = position.col
        self.top_row = position.row

    # --- Clamping ---

    def clamp_to_line(self, buffer: "TextBuffer"):
        """Pull the column back if the current line got shorter."""
        line_length = len(buffer.lines[self.row])
        if self.col > line_length:
            self.col = line_length

    def _scroll_to_cursor(self):
        if self.row < self.top_row:
            self.top_row = self.row
        elif self.row > self.bottom_row:
            self.top_row = self.row - self.visible_rows + 1

    def clamp(self, buffer: "TextBuffer"):
        """Restore every cursor/window invariant after a structural edit."""
        self.row = min(max(self.row, 0), len(buffer.lines) - 1)
        self.col = max(self.col, 0)
        self.clamp_to_line(buffer)
        self._scroll_to_cursor()

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self._scroll_to_cursor()

    def check(self, buffer: "TextBuffer"):
        """Raise CoordinateError if the cursor or window invariant is broken."""
        if not 0 <= self.row < len(buffer.lines):
            raise CoordinateError(f"cursor row {self.row} outside document of {len(buffer.lines)} lines")
        if not 0 <= self.col <= len(buffer.lines[self.row]):
            raise CoordinateError(
                f"cursor column {self.col} outside line {self.row} of length {len(buffer.lines[self.row])}"
            )
        if not self.top_row <= self.row <= self.bottom_row:
            raise CoordinateError(
                f"cursor row {self.row} outside window {self.top_row}..{self.bottom_row}"
            )
