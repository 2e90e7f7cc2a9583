"""Modal state machine: routes each key event by the active mode."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .commands import CommandInterpreter
from .constants import EditorConstants
from .keyboard import KeyEvent
from .modes import CommandState, InsertState, Mode, NormalState, VisualState
from .session import EditorSession

logger = logging.getLogger(__name__)


class ModeController:
    """Interprets key events for an EditorSession.

    Exactly one mode is active. Each event goes to that mode's handler,
    which may mutate the session and switch to at most one other mode.
    After every event the cursor column is clamped to its line and the
    cursor invariants are checked.
    """

    def __init__(self, session: EditorSession, interpreter: Optional[CommandInterpreter] = None):
        self.session = session
        self.interpreter = interpreter or CommandInterpreter()
        self._handlers: Dict[Mode, Callable[[KeyEvent], None]] = {
            Mode.NORMAL: self._handle_normal,
            Mode.INSERT: self._handle_insert,
            Mode.VISUAL: self._handle_visual,
            Mode.COMMAND: self._handle_command,
        }
        missing = set(Mode) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for modes: {sorted(m.value for m in missing)}")

    @property
    def keys(self):
        return self.session.config.keys

    def handle(self, event: KeyEvent) -> str:
        """Process one key event.

        Returns:
            The status line after the event
        """
        session = self.session
        self._handlers[session.mode](event)
        if session.running:
            session.viewport.clamp_to_line(session.buffer)
            session.check_invariants()
        return session.status

    # --- Normal mode ---

    def _handle_normal(self, event: KeyEvent):
        session = self.session
        state = session.state
        assert isinstance(state, NormalState)
        keys = self.keys
        buffer = session.buffer
        viewport = session.viewport

        if state.pending_chord is not None:
            # Second key of a chord; anything but a repeat cancels it
            first = state.pending_chord
            state.pending_chord = None
            if first == EditorConstants.DELETE_CHORD_KEY and event.code == EditorConstants.DELETE_CHORD_KEY:
                buffer.delete_line(viewport.row)
                viewport.clamp(buffer)
            return

        code = event.code
        if code == keys.insert_mode:
            session.enter(InsertState())
        elif code == keys.visual_mode:
            session.enter(VisualState.anchored_at(viewport.cursor))
        elif code == keys.paste:
            block = session.clipboard.pop()
            if block is not None:
                buffer.paste(block, viewport.row)
        elif code == EditorConstants.COMMAND_KEY:
            session.enter(CommandState())
        elif code == EditorConstants.DELETE_CHORD_KEY:
            state.pending_chord = code
        elif code == EditorConstants.OPEN_LINE_KEY:
            buffer.insert_blank_line_below(viewport.row)
            viewport.move_down(buffer)
        elif code == EditorConstants.NEXT_MATCH_KEY:
            self._jump(session.matches.next())
        elif code == EditorConstants.PREVIOUS_MATCH_KEY:
            self._jump(session.matches.previous())
        elif event.is_direction:
            viewport.move(event.value, buffer)

    def _jump(self, position):
        # Matches are not updated by later edits, so the row may be gone
        if position is not None:
            viewport = self.session.viewport
            viewport.jump_to(position)
            viewport.clamp(self.session.buffer)

    # --- Insert mode ---

    def _handle_insert(self, event: KeyEvent):
        session = self.session
        buffer = session.buffer
        viewport = session.viewport

        if event.code == self.keys.normal_mode:
            session.enter(NormalState())
        elif event.is_special('backspace'):
            buffer.delete_char_before(viewport)
        elif event.is_special('enter'):
            buffer.split_line(viewport)
        elif event.is_direction:
            viewport.move(event.value, buffer)
        elif event.is_printable:
            if buffer.insert_char(viewport, event.value):
                viewport.move_right(buffer)

    # --- Visual mode ---

    def _handle_visual(self, event: KeyEvent):
        session = self.session
        state = session.state
        assert isinstance(state, VisualState)
        viewport = session.viewport

        if event.code == self.keys.normal_mode:
            session.enter(NormalState())
        elif event.code == self.keys.yank:
            block = session.buffer.yank(state.selection)
            session.clipboard.push(block)
            noun = "line" if len(block) == 1 else "lines"
            session.status = f"{len(block)} {noun} yanked"
            session.enter(NormalState())
        elif event.is_direction:
            viewport.move(event.value, session.buffer)
            state.selection.end = viewport.cursor

    # --- Command mode ---

    def _handle_command(self, event: KeyEvent):
        session = self.session
        state = session.state
        assert isinstance(state, CommandState)

        if event.is_special('enter'):
            text = state.text
            session.enter(NormalState())
            session.status = self.interpreter.execute(session, text)
        elif event.code == self.keys.normal_mode:
            session.enter(NormalState())
            session.status = ""
        elif event.is_special('backspace'):
            state.text = state.text[:-1]
            if not state.text:
                session.enter(NormalState())
                session.status = ""
        elif event.is_printable:
            state.text += event.value
