"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional, Sequence, Tuple
import sys
import select

from .constants import LineConstants
from .line import EditableLine, RenderMode


def visible_slice(line: EditableLine, width: int) -> Tuple[str, int]:
    """Return the text and caret column to draw inside a box of ``width``.

    Scrolling lines already expose their window. Truncated lines are
    clipped and the caret pinned to the box edge. Full lines are scrolled
    here, by the host, just far enough to keep the caret visible.
    """
    width = max(0, width)
    text = line.render_text()
    cursor = line.display_cursor()
    if line.render_mode != RenderMode.FULL:
        return text[:width], min(cursor, width)
    start = max(0, cursor - width)
    return text[start:start + width], cursor - start


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Last frame drawn, for minimal updates
        self._last_rows: Optional[list[str]] = None
        self._last_size: Optional[Tuple[int, int]] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
            except Exception:
                # Justification: curtsies fails to initialize without a real
                # tty (CI, pipes). Run without key input instead of crashing.
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app.
                pass
            finally:
                self._curtsies_input = None

    def invalidate_frame(self) -> None:
        """Force a full repaint on the next draw."""
        self._last_rows = None
        self._last_size = None

    def prompt_box_width(self, prompt: str) -> int:
        """Columns available for text inside the prompt box.

        One column past the text stays free for the caret.
        """
        return max(0, self.width - LineConstants.BOX_BORDER_COLUMNS - len(prompt) - 1)

    def compose_rows(self, history: Sequence[str], line: EditableLine, prompt: str,
                     status: Optional[str] = None) -> Tuple[list[str], int]:
        """Lay out a full frame.

        Returns:
            The rows to draw, top to bottom, and the caret column on the
            prompt row
        """
        width = self.width
        height = self.term.height
        box_width = self.prompt_box_width(prompt)
        text, caret = visible_slice(line, box_width)

        history_rows = max(0, height - 4)
        shown = list(history[-history_rows:]) if history_rows else []
        rows = [""] * (history_rows - len(shown)) + [h[:width] for h in shown]
        rows.append("┌" + "─" * max(0, width - 2) + "┐")
        rows.append("│" + prompt + text.ljust(box_width + 1) + "│")
        rows.append("└" + "─" * max(0, width - 2) + "┘")
        if status:
            rows.append(status[:width])
        else:
            hint = LineConstants.HELP_HINT
            rows.append(hint.rjust(width - 1)[:width])
        return [row.ljust(width)[:width] for row in rows], 1 + len(prompt) + caret

    def draw_frame(self, history: Sequence[str], line: EditableLine, prompt: str,
                   status: Optional[str] = None) -> None:
        """Diff against the last frame and write only changed rows."""
        rows, caret_x = self.compose_rows(history, line, prompt, status)
        size = (self.width, self.term.height)
        if self._last_rows is None or self._last_size != size or len(self._last_rows) != len(rows):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = [""] * len(rows)
            self._last_size = size

        for y, row in enumerate(rows):
            if row != self._last_rows[y]:
                print(self.term.move(y, 0) + row, end='')
                self._last_rows[y] = row

        prompt_row = len(rows) - 3
        print(self.term.move(prompt_row, caret_x) + self.term.normal_cursor, end='', flush=True)

    def draw_message(self, lines: Sequence[str], footer: str) -> None:
        """Draw centered text over a cleared screen, e.g. help or errors."""
        self.invalidate_frame()
        print(self.term.home + self.term.clear, end='')
        top = max(0, (self.term.height - len(lines)) // 2)
        left = max(0, (self.width - max((len(s) for s in lines), default=0)) // 2)
        for i, text in enumerate(lines):
            print(self.term.move(top + i, left) + text, end='')
        print(self.term.move(self.term.height - 1, 0) + footer[:self.width], end='')
        print(self.term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress as a curtsies token string.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
