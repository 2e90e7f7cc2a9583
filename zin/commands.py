"""Colon commands typed in Command mode (":q", ":E", ":F term")."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import Position
    from .session import EditorSession

logger = logging.getLogger(__name__)


class ColonCommand(ABC):
    """Base class for colon commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', args: list[str]) -> str:
        """Run the command.

        Args:
            session: The editing session
            args: Whitespace-separated tokens after the command keyword

        Returns:
            Text for the status line
        """
        pass


class QuitCommand(ColonCommand):
    """End the session at once; unsaved changes are not prompted for."""

    def execute(self, session, args):
        session.running = False
        return ""


class WriteCommand(ColonCommand):
    """Persist the buffer. Write errors propagate to the caller."""

    def execute(self, session, args):
        size = session.buffer.persist()
        return f'"{session.buffer.name}", {size}B written'


def _format_matches(matches: list['Position']) -> str:
    return "[" + ", ".join(f"({m.row}, {m.col})" for m in matches) + "]"


class FindCommand(ColonCommand):
    """Search every line and jump to the first match."""

    def execute(self, session, args):
        if not args:
            return "Usage: :F <term>"
        term = " ".join(args)
        found = session.buffer.find(term)
        if not found:
            session.matches.clear()
            return f"Couldn't find: {term}"
        session.matches.populate(found)
        session.viewport.jump_to(found[0])
        return f"Found: {term} at {_format_matches(found)}"


class CommandInterpreter:
    """Registry mapping command keywords to commands."""

    def __init__(self):
        self._commands: Dict[str, ColonCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register('q', QuitCommand())
        self.register('E', WriteCommand())
        self.register('F', FindCommand())

    def register(self, keyword: str, command: ColonCommand):
        """Register a command under a keyword (without the leading colon)."""
        self._commands[keyword] = command

    def get_command(self, keyword: str) -> Optional[ColonCommand]:
        return self._commands.get(keyword)

    def execute(self, session: 'EditorSession', text: str) -> str:
        """Parse and run a command line such as ":F needle".

        Returns:
            Status line text; unknown commands produce a message, not an error
        """
        body = text[len(EditorConstants.COMMAND_PREFIX):] if text.startswith(EditorConstants.COMMAND_PREFIX) else text
        tokens = body.split()
        command = self.get_command(tokens[0]) if tokens else None
        if command is None:
            logger.debug(f"Unknown command {text!r}")
            return f"Unknown command: {text}"
        logger.debug(f"Running command {text!r}")
        return command.execute(session, tokens[1:])
