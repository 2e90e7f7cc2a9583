"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed
from curtsies import Input

from .config import RGB, Theme
from .constants import EditorConstants
from .highlighter import Category
from .modes import Mode
from .render import Frame


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_size: Optional[tuple[int, int]] = None
        self._last_mode: Optional[Mode] = None

    def setup(self):
        """Enter fullscreen mode and put stdin in raw mode."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._input is None:
            self._input = Input(keynames='curtsies')
            self._input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(EditorConstants.CURSOR_BLOCK, end='')
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so next update does a full clear."""
        self._last_lines = None
        self._last_size = None
        self._last_mode = None

    def _paint(self, fg: RGB, bg: RGB) -> str:
        return self.term.color_rgb(*fg) + self.term.on_color_rgb(*bg)

    def compose_row(self, frame_row, width: int, theme: Theme,
                    selection: Optional[tuple[int, int]] = None) -> str:
        """Render one row of tokens to an escape-coded string of exactly width cells.

        Tabs are shown as a single space so that cursor columns line up.
        """
        colors = theme.category_colors()
        cells: list[tuple[str, Category]] = []
        for token in frame_row:
            for ch in token.text:
                if len(cells) >= width:
                    break
                cells.append((' ' if ch == '\t' else ch, token.category))
        while len(cells) < width:
            cells.append((' ', Category.PLAIN))

        out = []
        active = None
        for x, (ch, category) in enumerate(cells):
            selected = bool(selection) and selection[0] <= x < selection[1]
            style = (category, selected)
            if style != active:
                fg, bg = colors[category]
                out.append(self.term.normal + self._paint(fg, bg))
                if selected:
                    out.append(self.term.reverse)
                active = style
            out.append(ch)
        out.append(self.term.normal)
        return ''.join(out)

    def compose_status_bar(self, frame: Frame, width: int, theme: Theme) -> str:
        """Mode label on the left, buffer name centred."""
        label = frame.mode_label[:width]
        name = frame.name + (" [+]" if frame.modified else "")
        bar_fg, bar_bg = theme.bar_colors()
        label_fg, label_bg = theme.mode_label_colors(frame.mode == Mode.NORMAL)

        cells = [' '] * (width - len(label))
        start = max(0, width // 2 - len(name) // 2 - len(label))
        for i, ch in enumerate(name):
            if start + i < len(cells):
                cells[start + i] = ch
        return (self.term.normal + self._paint(label_fg, label_bg) + label
                + self._paint(bar_fg, bar_bg) + ''.join(cells) + self.term.normal)

    def compose_command_line(self, frame: Frame, width: int, theme: Theme) -> str:
        fg, bg = theme.category_colors()[Category.PLAIN]
        return self.term.normal + self._paint(fg, bg) + frame.status[:width].ljust(width) + self.term.normal

    def draw_frame(self, frame: Frame, theme: Theme) -> None:
        """Diff against last frame and write only changed rows.

        Falls back to a full clear on first paint or when the size changes.
        """
        width = self.width
        size = (width, self.height)
        lines = [
            self.compose_row(row, width, theme, frame.selections[y] if y < len(frame.selections) else None)
            for y, row in enumerate(frame.rows)
        ]
        lines.append(self.compose_status_bar(frame, width, theme))
        lines.append(self.compose_command_line(frame, width, theme))

        if self._last_lines is None or self._last_size != size or len(self._last_lines) != len(lines):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [""] * len(lines)
            self._last_size = size

        for y, line in enumerate(lines):
            if line != self._last_lines[y]:
                print(self.term.move(y, 0) + line, end='')
                self._last_lines[y] = line

        if frame.mode != self._last_mode:
            shape = EditorConstants.CURSOR_BAR if frame.mode == Mode.INSERT else EditorConstants.CURSOR_BLOCK
            print(shape, end='')
            self._last_mode = frame.mode

        if frame.mode == Mode.COMMAND:
            y, x = len(frame.rows) + 1, len(frame.status)
        else:
            y, x = frame.cursor_y, frame.cursor_x
        x = min(x, max(0, width - 1))
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time
        """
        if self._input is None:
            return None
        if timeout is None:
            return str(next(self._input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including status bar and command line."""
        return self.term.height
