"""Text buffer: the document under edit and its backing file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from .viewport import Viewport

logger = logging.getLogger(__name__)


class BufferOpenError(OSError):
    """The backing file could not be opened or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class BufferWriteError(OSError):
    """Writing the buffer back to its file failed."""

    def __init__(self, path: Optional[str], reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class CoordinateError(IndexError):
    """A row/column outside the document reached the buffer.

    Cursor clamping is supposed to make this impossible, so it signals a
    logic error rather than a user-facing condition.
    """


@dataclass(frozen=True, order=True)
class Position:
    row: int = 0
    col: int = 0


@dataclass
class Selection:
    """Visual selection: `start` is the anchor, `end` follows the cursor."""
    start: Position
    end: Position

    def ordered(self) -> tuple[Position, Position]:
        """Return (first, last) in document order."""
        if self.end < self.start:
            return self.end, self.start
        return self.start, self.end


def split_lines(text: str) -> list[str]:
    """Split file content into lines.

    A final line terminator does not start an extra line, and a trailing
    carriage return is dropped from each line. Empty text gives one
    empty line.
    """
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]
    return lines or [""]


def _is_char(ch) -> bool:
    return isinstance(ch, str) and len(ch) == 1 and not ('\ud800' <= ch <= '\udfff')


class TextBuffer:
    """Ordered list of lines plus the open backing file.

    The document is never empty: it always holds at least one (possibly
    empty) line. Cursor-relative operations take the Viewport that owns
    the cursor and move it the way the edit implies.
    """

    lines: list[str]
    name: Optional[str]
    modified: bool

    def __init__(self, lines: Optional[Iterable[str]] = None, name: Optional[str] = None):
        self.lines = list(lines) if lines is not None else [""]
        if not self.lines:
            self.lines = [""]
        self.name = name
        self.modified = False
        self._handle: Optional[IO[bytes]] = None

    @classmethod
    def load(cls, path: str) -> "TextBuffer":
        """Open (or create) a file for read+write and load its lines.

        The file stays open until close() so that persist() rewrites the
        same file.

        Raises:
            BufferOpenError: The file cannot be opened, read or decoded
        """
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as e:
            raise BufferOpenError(path, e.strerror or str(e)) from e
        handle = os.fdopen(fd, 'r+b')
        try:
            text = handle.read().decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            handle.close()
            raise BufferOpenError(path, str(e)) from e

        buffer = cls(split_lines(text), name=path)
        buffer._handle = handle
        logger.info("Loaded %s (%d lines)", path, len(buffer.lines))
        return buffer

    def close(self) -> None:
        """Release the backing file."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "TextBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_backed(self) -> bool:
        return self._handle is not None

    # --- Bounds checks ---

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self.lines):
            raise CoordinateError(f"row {row} outside document of {len(self.lines)} lines")

    def _check_position(self, row: int, col: int) -> None:
        self._check_row(row)
        if not 0 <= col <= len(self.lines[row]):
            raise CoordinateError(
                f"column {col} outside line {row} of length {len(self.lines[row])}"
            )

    # --- Mutation ---

    def insert_char(self, cursor: "Viewport", ch: str) -> bool:
        """Insert one character at the cursor (appending at end of line).

        The cursor is not moved. Anything other than a single decodable
        character is dropped.

        Returns:
            True if the character was inserted
        """
        if not _is_char(ch):
            return False
        row, col = cursor.row, cursor.col
        self._check_position(row, col)
        line = self.lines[row]
        self.lines[row] = line[:col] + ch + line[col:]
        self.modified = True
        return True

    def delete_char_before(self, cursor: "Viewport") -> bool:
        """Backspace: delete left of the cursor or join with the line above.

        Returns:
            True if anything changed (False at the very start of the document)
        """
        row, col = cursor.row, cursor.col
        self._check_position(row, col)
        if col > 0:
            line = self.lines[row]
            self.lines[row] = line[:col - 1] + line[col:]
            cursor.move_left()
        elif row > 0:
            current = self.lines.pop(row)
            join_col = len(self.lines[row - 1])
            self.lines[row - 1] += current
            cursor.move_up()
            cursor.col = join_col
        else:
            return False
        self.modified = True
        return True

    def delete_line(self, row: int) -> None:
        """Remove a line. The caller re-clamps the cursor afterward."""
        self._check_row(row)
        del self.lines[row]
        if not self.lines:
            self.lines.append("")
        self.modified = True

    def indentation(self, row: int) -> int:
        """Count leading spaces; a line of only spaces counts as 0."""
        self._check_row(row)
        line = self.lines[row]
        stripped = line.lstrip(' ')
        if not stripped:
            return 0
        return len(line) - len(stripped)

    def split_line(self, cursor: "Viewport") -> None:
        """Enter: break the line at the cursor, keeping its indentation.

        The new line gets the current line's leading spaces followed by the
        text from the cursor onward; the cursor lands after that indent.
        """
        row, col = cursor.row, cursor.col
        self._check_position(row, col)
        indent = self.indentation(row)
        line = self.lines[row]
        self.lines[row] = line[:col]
        self.lines.insert(row + 1, ' ' * indent + line[col:])
        self.modified = True
        cursor.move_down(self)
        cursor.col = indent

    def insert_blank_line_below(self, row: int) -> None:
        self._check_row(row)
        self.lines.insert(row + 1, "")
        self.modified = True

    def paste(self, block: list[str], at_row: int) -> None:
        """Insert block lines as new lines starting at at_row."""
        if not 0 <= at_row <= len(self.lines):
            raise CoordinateError(f"paste row {at_row} outside document of {len(self.lines)} lines")
        if not block:
            return
        self.lines[at_row:at_row] = list(block)
        self.modified = True

    # --- Queries ---

    def yank(self, selection: Selection) -> list[str]:
        """Copy the selected text as a block of lines.

        Single-row selections give the text between the two columns. Wider
        selections give the tail of the first row, whole middle rows and the
        head of the last row. Columns past a line's end are clamped.
        """
        start, end = selection.ordered()
        self._check_row(start.row)
        self._check_row(end.row)
        if start.col < 0 or end.col < 0:
            raise CoordinateError(f"negative column in selection {selection}")

        if start.row == end.row:
            line = self.lines[start.row]
            lo = min(start.col, end.col, len(line))
            hi = min(max(start.col, end.col), len(line))
            return [line[lo:hi]]

        first = self.lines[start.row]
        last = self.lines[end.row]
        block = [first[min(start.col, len(first)):]]
        block.extend(self.lines[start.row + 1:end.row])
        block.append(last[:min(end.col, len(last))])
        return block

    def find(self, term: str) -> list[Position]:
        """Return the first occurrence of term on each line, top to bottom."""
        if not term:
            return []
        matches = []
        for row, line in enumerate(self.lines):
            col = line.find(term)
            if col >= 0:
                matches.append(Position(row, col))
        return matches

    # --- Persistence ---

    def persist(self) -> int:
        """Truncate the backing file and rewrite every line.

        Each line is written with a single line feed, UTF-8 encoded.

        Returns:
            The size of the file in bytes after writing

        Raises:
            BufferWriteError: No backing file, or the write failed
        """
        if self._handle is None:
            raise BufferWriteError(self.name, "no backing file")
        handle = self._handle
        try:
            data = ''.join(line + '\n' for line in self.lines).encode('utf-8')
            handle.seek(0)
            handle.truncate()
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
            size = os.fstat(handle.fileno()).st_size
        except (OSError, UnicodeEncodeError) as e:
            raise BufferWriteError(self.name, str(e)) from e
        self.modified = False
        logger.info("Wrote %s (%d bytes)", self.name, size)
        return size
