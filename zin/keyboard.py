"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event.

    `code` is the numeric input code the mode key bindings are compared
    against: the code point for characters, and fixed codes for escape,
    enter, tab and backspace.
    """
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    code: Optional[int] = None

    @property
    def is_printable(self) -> bool:
        if self.key_type != KeyType.REGULAR or len(self.value) != 1:
            return False
        return ord(self.value) >= 32 or self.value == '\t'

    @property
    def is_direction(self) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value in ('left', 'right', 'up', 'down')

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name


def regular(ch: str) -> KeyEvent:
    """Build the event for a plain character key."""
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch, code=ord(ch))


def special(name: str) -> KeyEvent:
    """Build the event for a named key such as 'left' or 'enter'."""
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=f"<{name.upper()}>",
                    code=_SPECIAL_CODES.get(name))


_SPECIAL_CODES = {
    'escape': EditorConstants.ESCAPE_CODE,
    'enter': EditorConstants.ENTER_CODE,
    'backspace': EditorConstants.BACKSPACE_CODE,
}

_SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: Key string such as 'a', '<LEFT>', '<Ctrl-x>' or '<ESC>'

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set(parts[:-1])
            base = parts[-1]
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return regular(' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t', code=EditorConstants.TAB_CODE)
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are enter, Ctrl-H is backspace
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str,
                                    code=EditorConstants.ENTER_CODE)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str,
                                    code=EditorConstants.BACKSPACE_CODE)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str,
                                code=ord(base) & 0x1f)
            if 'alt' in mods and (base in _SPECIALS or len(base) == 1):
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b',
                                code=EditorConstants.ESCAPE_CODE)
            if base in _SPECIALS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str,
                                code=_SPECIAL_CODES.get(base))
            # Fallback: treat unknown token as special
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if key_str in ('\x7f', '\x08'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str,
                            code=EditorConstants.BACKSPACE_CODE)
        if key_str == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t', code=EditorConstants.TAB_CODE)
        if key_str in ('\n', '\r'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str,
                            code=EditorConstants.ENTER_CODE)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, code=o)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b',
                            code=EditorConstants.ESCAPE_CODE)

        # Regular character
        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str,
            code=ord(key_str) if len(key_str) == 1 else None,
        )
