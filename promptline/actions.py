"""Abstract edit actions and their mapping onto line operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .line import EditableLine


class Action(Enum):
    """Discrete edit actions a host can feed to a line."""
    INSERT_CHAR = "insert_char"
    PASTE = "paste"
    BACKSPACE = "backspace"
    LEFT = "left"
    WORD_LEFT = "word_left"
    RIGHT = "right"
    WORD_RIGHT = "word_right"
    JUMP_END = "jump_end"      # "up" gesture
    JUMP_START = "jump_start"  # "down" gesture
    SUBMIT = "submit"
    RESIZE = "resize"


@dataclass
class EditAction:
    """One decoded action, with its payload where it has one."""
    action: Action
    text: str = ""
    width: int = 0


def clean_paste(text: str) -> str:
    """Strip line breaks so pasted text stays on a single line."""
    return text.replace("\r\n", "").replace("\r", "").replace("\n", "")


def apply_action(line: EditableLine, edit: EditAction) -> Optional[str]:
    """Apply one action to a line.

    Returns:
        The flushed text for SUBMIT, otherwise None
    """
    action = edit.action
    if action == Action.INSERT_CHAR:
        line.insert_char(edit.text)
    elif action == Action.PASTE:
        line.insert_str(edit.text)
    elif action == Action.BACKSPACE:
        line.delete_before_cursor()
    elif action == Action.LEFT:
        line.move_left()
    elif action == Action.WORD_LEFT:
        line.word_left()
    elif action == Action.RIGHT:
        line.move_right()
    elif action == Action.WORD_RIGHT:
        line.word_right()
    elif action == Action.JUMP_END:
        line.jump_to_end()
    elif action == Action.JUMP_START:
        line.jump_to_start()
    elif action == Action.SUBMIT:
        return line.flush()
    elif action == Action.RESIZE:
        line.resize(edit.width)
    return None
