"""Search results and match navigation."""

from __future__ import annotations

from typing import Optional

from .buffer import Position


class MatchSet:
    """Ordered matches of the last search and the match the cursor is on.

    Navigation clamps at both ends instead of wrapping. An empty set means
    there is no active search. Positions are those found by the search and
    are not adjusted when the buffer is edited afterward.
    """

    def __init__(self):
        self.matches: list[Position] = []
        self.current_index = 0

    def __len__(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches

    def populate(self, matches: list[Position]):
        """Replace the results with a new search and select the first match."""
        self.matches = list(matches)
        self.current_index = 0

    def clear(self):
        self.matches = []
        self.current_index = 0

    def current(self) -> Optional[Position]:
        if not self.matches:
            return None
        return self.matches[self.current_index]

    def next(self) -> Optional[Position]:
        """Advance unless already on the last match."""
        if not self.matches:
            return None
        if self.current_index < len(self.matches) - 1:
            self.current_index += 1
        return self.matches[self.current_index]

    def previous(self) -> Optional[Position]:
        """Step back unless already on the first match."""
        if not self.matches:
            return None
        if self.current_index > 0:
            self.current_index -= 1
        return self.matches[self.current_index]
