"""Command pattern implementation mapping key events to line actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .actions import Action, EditAction, apply_action, clean_paste
from .clipboard import ClipboardError
from .constants import LineConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class LineCommand(ABC):
    """Base class for commands bound to keys."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Host owning the active line
            key_event: The key event that triggered this command

        Returns:
            True if the command changed the line's text
        """


class MovementCommand(LineCommand):
    """Cursor and viewport motion; never changes the text."""

    def __init__(self, action: Action):
        self.action = action

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        apply_action(editor.line, EditAction(self.action))
        return False


class EditCommand(LineCommand):
    """Base class for commands that may change the text."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        before = editor.line.text
        self._edit(editor, key_event)
        return editor.line.text != before

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        apply_action(editor.line, EditAction(Action.BACKSPACE))


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = key_event.value
        # Filter out control characters
        if not text or ord(text[0]) < 32 or text[0] == '\x7f':
            return
        if len(text) == 1:
            apply_action(editor.line, EditAction(Action.INSERT_CHAR, text=text))
        else:
            apply_action(editor.line, EditAction(Action.PASTE, text=clean_paste(text)))


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        try:
            text = editor.clipboard.paste_text()
        except ClipboardError as e:
            # A failed read leaves the line untouched
            editor.status_message = LineConstants.PASTE_FAILED_MESSAGE.format(e)
            return
        text = clean_paste(text)
        if text:
            apply_action(editor.line, EditAction(Action.PASTE, text=text))


class SubmitCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = apply_action(editor.line, EditAction(Action.SUBMIT))
        logger.debug(f"Submitted {len(text or '')} characters")
        editor.submit(text or "")


class SystemCommand(LineCommand):
    """Base class for host-level commands like quit and help."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.running = False


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], LineCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        left = MovementCommand(Action.LEFT)
        right = MovementCommand(Action.RIGHT)
        word_left = MovementCommand(Action.WORD_LEFT)
        word_right = MovementCommand(Action.WORD_RIGHT)
        to_start = MovementCommand(Action.JUMP_START)
        to_end = MovementCommand(Action.JUMP_END)

        self.register((KeyType.SPECIAL, 'left'), left)
        self.register((KeyType.SPECIAL, 'right'), right)
        self.register((KeyType.CTRL, 'b'), left)
        self.register((KeyType.CTRL, 'f'), right)

        # Word movement: Ctrl or Alt with arrows, Emacs Alt-b/f
        self.register((KeyType.CTRL, 'left'), word_left)
        self.register((KeyType.CTRL, 'right'), word_right)
        self.register((KeyType.ALT, 'left'), word_left)
        self.register((KeyType.ALT, 'right'), word_right)
        self.register((KeyType.ALT, 'b'), word_left)
        self.register((KeyType.ALT, 'f'), word_right)

        # Up jumps to the end, down to the start
        self.register((KeyType.SPECIAL, 'up'), to_end)
        self.register((KeyType.SPECIAL, 'down'), to_start)
        self.register((KeyType.SPECIAL, 'end'), to_end)
        self.register((KeyType.SPECIAL, 'home'), to_start)
        self.register((KeyType.CTRL, 'e'), to_end)
        self.register((KeyType.CTRL, 'a'), to_start)

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), SubmitCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())

        # System
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: LineCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[LineCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the line's text changed
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
