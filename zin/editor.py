"""Main editor controller: wires the terminal to an editing session."""

import logging
import os
import select
import signal
from typing import Optional

from .buffer import TextBuffer
from .config import Config, load_config
from .constants import EditorConstants
from .controller import ModeController
from .highlighter import Highlighter
from .keyboard import KeyboardHandler, KeyEvent
from .render import Frame, build_frame
from .session import EditorSession
from .syntax import syntax_for_path
from .terminal import TerminalInterface
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Editor:
    """Terminal editor application for a single buffer.

    The loop is synchronous: draw, block until a key (or a resize) arrives,
    process it completely, repeat.
    """

    def __init__(self, buffer: TextBuffer, terminal: Optional[TerminalInterface] = None,
                 config: Optional[Config] = None):
        """Build the session around an already opened buffer."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.config = config or load_config()
        syntax = syntax_for_path(buffer.name or "")
        self.session = EditorSession(
            buffer=buffer,
            viewport=Viewport(width=self.terminal.width, height=self.terminal.height),
            config=self.config,
            syntax=syntax,
        )
        self.highlighter = Highlighter(syntax)
        self.controller = ModeController(self.session)
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.session.running

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def frame(self) -> Frame:
        """Clamp the cursor and build the frame for the current state."""
        self.session.viewport.clamp_to_line(self.session.buffer)
        return build_frame(self.session, self.highlighter)

    def handle_key_event(self, key_event: KeyEvent) -> str:
        """Feed one key event to the mode controller.

        Returns:
            The status line after the event
        """
        return self.controller.handle(key_event)

    def _sync_size(self):
        self.session.viewport.resize(self.terminal.width, self.terminal.height)

    def _draw(self):
        self.terminal.draw_frame(self.frame(), self.config.theme)

    def run(self):
        """Run the main editor loop until the session stops.

        Errors from persisting the buffer propagate after the terminal has
        been restored.
        """
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        logger.info("Editing %s", self.session.buffer.name)

        try:
            self.terminal.setup()
            self._sync_size()
            need_draw = True
            while self.session.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self._sync_size()
                    self.terminal.invalidate_frame()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
