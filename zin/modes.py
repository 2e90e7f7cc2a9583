"""Editor modes and the transient state each one owns."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from .buffer import Position, Selection
from .constants import EditorConstants


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"

    @property
    def label(self) -> str:
        """Status bar label, e.g. ' NORMAL '."""
        return f" {self.name} "


@dataclass
class NormalState:
    mode: ClassVar[Mode] = Mode.NORMAL
    # First key of a two-key chord ("dd") waiting for its second key
    pending_chord: Optional[int] = None


@dataclass
class InsertState:
    mode: ClassVar[Mode] = Mode.INSERT


@dataclass
class VisualState:
    mode: ClassVar[Mode] = Mode.VISUAL
    selection: Selection = field(default_factory=lambda: Selection(Position(), Position()))

    @classmethod
    def anchored_at(cls, position: Position) -> "VisualState":
        return cls(selection=Selection(start=position, end=position))


@dataclass
class CommandState:
    mode: ClassVar[Mode] = Mode.COMMAND
    text: str = EditorConstants.COMMAND_PREFIX


ModeState = Union[NormalState, InsertState, VisualState, CommandState]
