"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


# Named keys that keep their name as the event value
SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'f1',
})

# Token spellings normalized to a single base name
_BASE_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'return': 'enter',
    'padenter': 'enter',
    'esc': 'escape',
    'spacebar': 'space',
    'spc': 'space',
}


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as read from the terminal
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Read the next key from the terminal and parse it."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token such as '<Ctrl-LEFT>' or a plain character.

        Both '-' and '+' separate modifiers ('<Esc+b>'); 'meta' and a
        leading 'esc' count as Alt.
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (8, 127):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if o in (10, 13):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if 1 <= o <= 26 and key_str != '\t':
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str, is_ctrl=True)
            if o == 27:
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        parts = key_str[1:-1].replace('+', '-').split('-')
        base = parts[-1] or '-'
        if len(base) > 1:
            base = base.lower()
            base = _BASE_ALIASES.get(base, base)
        mods = {m.lower() for m in parts[:-1] if m}
        if mods & {'meta', 'esc'}:
            mods.add('alt')

        if not mods:
            if base == 'space':
                return KeyEvent(KeyType.REGULAR, ' ', ' ')
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', '\t')
            if base == 'escape':
                return KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')
            if len(base) == 1:
                return KeyEvent(KeyType.REGULAR, base, base)

        if 'ctrl' in mods:
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            return KeyEvent(KeyType.CTRL, base.lower(), key_str, is_ctrl=True,
                            is_alt='alt' in mods, is_shift='shift' in mods)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(KeyType.ALT, base.lower(), key_str, is_alt=True,
                            is_shift='shift' in mods)
        # Unknown tokens fall through as specials so commands can ignore them
        return KeyEvent(KeyType.SPECIAL, base, key_str, is_shift='shift' in mods)


def create_keyboard_handler(terminal_interface):
    """Factory function to create a keyboard handler."""
    return KeyboardHandler(terminal_interface)
