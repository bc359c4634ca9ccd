"""Editable single-line text buffers backing every prompt field."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class RenderMode(Enum):
    """How the host is expected to draw a line."""
    FULL = "static"          # Whole buffer; host wraps or scrolls
    TRUNCATED = "truncated"  # Whole buffer clipped to a fixed box
    SCROLL = "scroll"        # Visible window only


class EditableLine(ABC):
    """Capability interface shared by every line variant.

    Every operation is total: any combination of text and cursor state
    yields a valid state, with clamping instead of errors.
    """

    render_mode: RenderMode = RenderMode.FULL

    def __init__(self, text: str = ""):
        self.text = text
        self.cursor = 0

    def is_empty(self) -> bool:
        return not self.text

    @property
    @abstractmethod
    def absolute_cursor(self) -> int:
        """Index of the edit position within the whole text."""

    @abstractmethod
    def render_text(self) -> str:
        """Text slice to draw; the caret column is relative to its start."""

    def display_cursor(self) -> int:
        return self.cursor

    @abstractmethod
    def flush(self) -> str:
        """Return the whole text and reset the buffer to empty."""

    @abstractmethod
    def jump_to_start(self):
        pass

    @abstractmethod
    def jump_to_end(self):
        pass

    @abstractmethod
    def move_left(self):
        pass

    @abstractmethod
    def move_right(self):
        pass

    @abstractmethod
    def word_left(self):
        pass

    @abstractmethod
    def word_right(self):
        pass

    @abstractmethod
    def insert_char(self, char: str):
        pass

    @abstractmethod
    def insert_str(self, text: str):
        pass

    @abstractmethod
    def delete_before_cursor(self):
        pass

    def resize(self, width: int):
        """Viewport width changed; lines without a viewport ignore it."""

    @staticmethod
    def _last_space(text: str) -> int:
        """Index of the last whitespace character in text, or 0."""
        for i in range(len(text) - 1, -1, -1):
            if text[i].isspace():
                return i
        return 0

    @staticmethod
    def _first_space(text: str) -> Optional[int]:
        """Index of the first whitespace character in text, or None."""
        for i, ch in enumerate(text):
            if ch.isspace():
                return i
        return None


class UnboundedLine(EditableLine):
    """Line whose cursor ranges over the whole text, with no viewport."""

    render_mode = RenderMode.FULL

    @property
    def absolute_cursor(self) -> int:
        return self.cursor

    def render_text(self) -> str:
        return self.text

    def flush(self) -> str:
        text = self.text
        self.text = ""
        self.cursor = 0
        return text

    def jump_to_start(self):
        self.cursor = 0

    def jump_to_end(self):
        self.cursor = len(self.text)

    def move_left(self):
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self):
        if self.cursor < len(self.text):
            self.cursor += 1

    def word_left(self):
        if self.cursor > 0:
            self.cursor = self._last_space(self.text[:self.cursor])

    def word_right(self):
        if self.cursor < len(self.text):
            n = self._first_space(self.text[self.cursor + 1:])
            if n is None:
                self.cursor = len(self.text)
            else:
                self.cursor += n + 1

    def insert_char(self, char: str):
        self.text = self.text[:self.cursor] + char + self.text[self.cursor:]
        self.move_right()

    def insert_str(self, text: str):
        self.text = self.text[:self.cursor] + text + self.text[self.cursor:]
        self.cursor += len(text)

    def delete_before_cursor(self):
        if self.text and self.cursor > 0:
            self.text = self.text[:self.cursor - 1] + self.text[self.cursor:]
            self.move_left()


class TruncatedLine(UnboundedLine):
    """Unbounded line that the host draws clipped to a fixed box."""

    render_mode = RenderMode.TRUNCATED


class ScrollingLine(EditableLine):
    """Line with a viewport of ``width`` characters that follows the cursor.

    ``cursor`` is relative to the viewport and ``offset`` is the index of
    the first visible character, so the edit position in the text is
    ``cursor + offset``. Every operation keeps::

        0 <= cursor <= width
        0 <= offset <= max_offset
        cursor + offset <= len(text)
    """

    render_mode = RenderMode.SCROLL

    def __init__(self, width: int, text: str = ""):
        super().__init__(text)
        self.width = max(0, width)
        self.offset = 0

    @property
    def absolute_cursor(self) -> int:
        return self.cursor + self.offset

    @property
    def max_offset(self) -> int:
        return max(0, len(self.text) - self.width)

    def at_end(self) -> bool:
        return self.absolute_cursor == len(self.text)

    def _overflow_right(self, delta: int):
        self.cursor += delta
        if self.cursor > self.width:
            self.offset += self.cursor - self.width
            self.cursor = self.width

    def render_text(self) -> str:
        return self.text[self.offset:]

    def flush(self) -> str:
        text = self.text
        self.jump_to_start()
        self.text = ""
        return text

    def jump_to_start(self):
        self.cursor = 0
        self.offset = 0

    def jump_to_end(self):
        self.cursor = min(self.width, len(self.text))
        self.offset = self.max_offset

    def move_left(self):
        if self.cursor > 0:
            self.cursor -= 1
        elif self.offset > 0:
            self.offset -= 1

    def move_right(self):
        if self.at_end():
            return
        if self.cursor < self.width:
            self.cursor += 1
        else:
            self.offset += 1

    def word_left(self):
        if self.cursor == 0 and self.offset == 0:
            return
        found = self._last_space(self.text[:self.absolute_cursor])
        if found < self.offset:
            # Target is left of the window
            self.cursor = 0
            self.offset = found
        elif found > self.offset:
            self.cursor = found - self.offset
        else:
            self.jump_to_start()

    def word_right(self):
        if self.at_end():
            return
        n = self._first_space(self.text[self.absolute_cursor:])
        if n is None:
            self.jump_to_end()
        else:
            self._overflow_right(n + 1)

    def insert_char(self, char: str):
        pos = self.absolute_cursor
        self.text = self.text[:pos] + char + self.text[pos:]
        self.move_right()

    def insert_str(self, text: str):
        pos = self.absolute_cursor
        if pos == 0:
            self.text = text + self.text
            self._overflow_right(len(text))
        elif pos == len(self.text):
            # Window slides to the new tail; caret keeps its column
            self.text += text
            self.offset = self.max_offset
        else:
            self.text = self.text[:pos] + text + self.text[pos:]
            self._overflow_right(len(text))

    def delete_before_cursor(self):
        pos = self.absolute_cursor
        if not self.text or pos == 0:
            return
        self.text = self.text[:pos - 1] + self.text[pos:]
        self.move_left()
        excess = self.offset - self.max_offset
        if excess > 0:
            self.offset -= excess
            self.cursor += excess

    def resize(self, width: int):
        width = max(0, width)
        if width == self.width:
            return
        pos = self.absolute_cursor
        self.width = width
        if width == 0:
            self.cursor = 0
            self.offset = pos
            return
        # Lay the text out in width-sized blocks and land in the block
        # holding the old absolute cursor.
        self.cursor = pos % width
        self.offset = pos // width
        if self.offset > self.max_offset:
            self.jump_to_end()


def create_line(mode: RenderMode, width: int = 0) -> EditableLine:
    """Build an empty line for the given render mode."""
    if mode == RenderMode.SCROLL:
        return ScrollingLine(width)
    if mode == RenderMode.TRUNCATED:
        return TruncatedLine()
    return UnboundedLine()
