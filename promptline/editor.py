"""Main controller: a prompt line at the bottom, submitted lines above."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Any, Dict, Optional

from .actions import Action, EditAction, apply_action
from .clipboard import ClipboardManager
from .commands import CommandRegistry
from .constants import LineConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .line import RenderMode, create_line
from .settings import default_settings
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)

HELP_LINES = [
    "PROMPTLINE HELP",
    "",
    "  ←/→            Move one character",
    "  Ctrl/Alt-←/→   Move one word (also Alt-B/F)",
    "  ↑ / End        Jump to end of line",
    "  ↓ / Home       Jump to start of line",
    "  Backspace      Delete character before cursor",
    "  Ctrl-V         Paste from clipboard",
    "  Enter          Submit line",
    "  Ctrl-Q         Quit",
    "  F1             Help",
]


class Editor:
    """Interactive prompt application driving one editable line."""

    def __init__(self, terminal: Optional[TerminalInterface] = None, clipboard=None,
                 settings: Optional[Dict[str, Any]] = None, line_mode: Optional[str] = None):
        """Initialize the editor components.

        Args:
            terminal: Terminal to draw on; a real one is created if omitted
            clipboard: Object with ``paste_text()``; defaults to the system clipboard
            settings: Loaded settings, see promptline.settings
            line_mode: Overrides the configured line mode for this run
        """
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.clipboard = clipboard or ClipboardManager()
        self.settings = dict(default_settings())
        self.settings.update(settings or {})
        self.prompt: str = self.settings["prompt"]
        self.history_limit: int = self.settings["history_limit"]
        mode = RenderMode(line_mode or self.settings["line_mode"])
        self.line = create_line(mode, self.terminal.prompt_box_width(self.prompt))
        self.command_registry = CommandRegistry()
        self.history: list[str] = []
        self.running = False
        self.error_mode = False  # True when terminal is too small
        self.status_message: Optional[str] = None
        self.help_visible = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def _handle_resize_signal(self, signum, frame):
        """Wake the main loop; the resize itself happens there."""
        del signum, frame  # Unused
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, LineConstants.RESIZE_PIPE_MARKER)

    def handle_resize(self):
        """Fit the line's viewport to the current prompt box."""
        width = self.terminal.prompt_box_width(self.prompt)
        logger.debug(f"Resizing prompt line to {width} columns")
        apply_action(self.line, EditAction(Action.RESIZE, width=width))
        self.terminal.invalidate_frame()

    def submit(self, text: str):
        """Record a flushed line in the history."""
        if not text:
            return
        self.history.append(text)
        if len(self.history) > self.history_limit:
            del self.history[:len(self.history) - self.history_limit]

    def show_help(self):
        self.help_visible = True

    def hide_help(self):
        self.help_visible = False
        self.terminal.invalidate_frame()

    def _terminal_too_small(self) -> bool:
        return (self.terminal.width < LineConstants.MIN_TERMINAL_WIDTH
                or self.terminal.height < LineConstants.MIN_TERMINAL_HEIGHT)

    def _draw(self):
        """Draw the current editor state to terminal."""
        if self.error_mode:
            message = LineConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                LineConstants.MIN_TERMINAL_WIDTH, LineConstants.MIN_TERMINAL_HEIGHT)
            self.terminal.draw_message([message], "Ctrl-Q to quit | Resize terminal to continue")
        elif self.help_visible:
            self.terminal.draw_message(HELP_LINES, " Press any key to continue")
        else:
            status = f" {self.status_message}" if self.status_message else None
            self.terminal.draw_frame(self.history, self.line, self.prompt, status)

    def _handle_key_event(self, key_event: KeyEvent) -> bool:
        """Handle a keyboard event.

        Returns:
            True if the line's text changed
        """
        if self.help_visible:
            self.hide_help()
            return False

        self.status_message = None

        if self.error_mode:
            # Only quitting works while the terminal is too small
            if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
                self.running = False
            return False

        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            return False

        return self.command_registry.execute(self, key_event)

    @staticmethod
    def _disable_flow_control():
        """Let Ctrl-Q and Ctrl-V reach the application.

        Returns:
            The previous termios settings, or None if unchanged
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            if hasattr(termios, 'IEXTEN'):
                new_settings[3] &= ~termios.IEXTEN
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError):
            return None

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize_signal)
        old_settings = None

        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                self.handle_resize()
                need_draw = True

                while self.running:
                    if need_draw:
                        self.error_mode = self._terminal_too_small()
                        self._draw()
                        need_draw = False

                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        self.handle_resize()
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)
                            need_draw = True

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError):
                        pass
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
