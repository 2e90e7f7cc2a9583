"""Yank stack shared by visual-mode yank and normal-mode paste."""

from typing import Optional


class Clipboard:
    """Last-in-first-out stack of yanked blocks.

    Each block is a list of lines. Paste consumes the most recent block,
    so pasting twice in a row uses two different yanks.
    """

    def __init__(self):
        self._blocks: list[list[str]] = []

    def __len__(self) -> int:
        return len(self._blocks)

    def __bool__(self) -> bool:
        return bool(self._blocks)

    def push(self, block: list[str]) -> None:
        self._blocks.append(list(block))

    def pop(self) -> Optional[list[str]]:
        """Remove and return the newest block, or None when empty."""
        if not self._blocks:
            return None
        return self._blocks.pop()

    def peek(self) -> Optional[list[str]]:
        if not self._blocks:
            return None
        return list(self._blocks[-1])
