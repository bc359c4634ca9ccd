"""Textual front end: the same line engine inside a Textual widget."""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from .actions import Action, EditAction, apply_action, clean_paste
from .clipboard import ClipboardError, ClipboardManager
from .constants import LineConstants
from .line import EditableLine, RenderMode, create_line
from .terminal import visible_slice

# Textual key names bound to actions that carry no payload
KEY_ACTIONS = {
    "left": Action.LEFT,
    "right": Action.RIGHT,
    "ctrl+left": Action.WORD_LEFT,
    "ctrl+right": Action.WORD_RIGHT,
    "alt+left": Action.WORD_LEFT,
    "alt+right": Action.WORD_RIGHT,
    "up": Action.JUMP_END,
    "end": Action.JUMP_END,
    "down": Action.JUMP_START,
    "home": Action.JUMP_START,
    "backspace": Action.BACKSPACE,
    "enter": Action.SUBMIT,
}


def render_line(line: EditableLine, prompt: str, width: int) -> Text:
    """Render prompt, visible text and a reverse-video caret cell."""
    visible, caret = visible_slice(line, width)
    text = Text(prompt)
    text.append(visible[:caret])
    text.append(visible[caret:caret + 1] or " ", style="reverse")
    text.append(visible[caret + 1:])
    return text


class LineInput(Widget, can_focus=True):
    """Single-line input backed by an EditableLine."""

    DEFAULT_CSS = """
    LineInput {
        height: 1;
    }
    """

    class Submitted(Message):
        """Posted when the user submits a non-empty line."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, mode: RenderMode = RenderMode.SCROLL,
                 prompt: str = LineConstants.DEFAULT_PROMPT, clipboard=None, **kwargs):
        super().__init__(**kwargs)
        self.prompt = prompt
        self.line = create_line(mode)
        self.clipboard = clipboard or ClipboardManager()

    def text_width(self, widget_width: int) -> int:
        # Leave one cell for the caret after the last character
        return max(0, widget_width - len(self.prompt) - 1)

    def action_for_key(self, key: str, character: Optional[str]) -> Optional[EditAction]:
        """Translate a Textual key into an action, or None if unbound.

        Raises:
            ClipboardError: if ctrl+v cannot read the clipboard
        """
        if key in KEY_ACTIONS:
            return EditAction(KEY_ACTIONS[key])
        if key == "ctrl+v":
            return EditAction(Action.PASTE, text=clean_paste(self.clipboard.paste_text()))
        if character and character.isprintable():
            return EditAction(Action.INSERT_CHAR, text=character)
        return None

    def apply(self, edit: EditAction) -> None:
        text = apply_action(self.line, edit)
        if edit.action == Action.SUBMIT and text:
            self.post_message(self.Submitted(text))
        self.refresh()

    def on_key(self, event: events.Key) -> None:
        try:
            edit = self.action_for_key(event.key, event.character)
        except ClipboardError as e:
            event.stop()
            self.notify(LineConstants.PASTE_FAILED_MESSAGE.format(e), severity="error")
            return
        if edit is None:
            return
        event.stop()
        event.prevent_default()
        self.apply(edit)

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.apply(EditAction(Action.PASTE, text=clean_paste(event.text)))

    def on_resize(self, event: events.Resize) -> None:
        self.apply(EditAction(Action.RESIZE, width=self.text_width(event.size.width)))

    def render(self) -> Text:
        return render_line(self.line, self.prompt, self.text_width(self.size.width))


class PromptlineApp(App):
    """Submitted lines above, the prompt line at the bottom."""

    CSS = """
    #history {
        height: 1fr;
    }
    LineInput {
        dock: bottom;
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, mode: RenderMode = RenderMode.SCROLL,
                 prompt: str = LineConstants.DEFAULT_PROMPT,
                 history_limit: int = LineConstants.DEFAULT_HISTORY_LIMIT, clipboard=None):
        super().__init__()
        self.mode = mode
        self.prompt = prompt
        self.history_limit = history_limit
        self.line_clipboard = clipboard
        self.history: list[str] = []

    def compose(self) -> ComposeResult:
        yield Static("", id="history")
        yield LineInput(self.mode, self.prompt, clipboard=self.line_clipboard)

    def on_mount(self) -> None:
        self.query_one(LineInput).focus()

    def on_line_input_submitted(self, message: LineInput.Submitted) -> None:
        self.history.append(message.value)
        del self.history[:-self.history_limit]
        self.query_one("#history", Static).update(Text("\n".join(self.history)))
