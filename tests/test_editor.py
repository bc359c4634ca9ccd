"""Test the terminal editor controller with a mocked terminal."""

import pytest
from unittest.mock import Mock
from promptline.clipboard import ClipboardError
from promptline.editor import Editor
from promptline.keyboard import KeyEvent, KeyType
from promptline.line import ScrollingLine, TruncatedLine, UnboundedLine
from promptline.terminal import TerminalInterface


def make_terminal(width=40, height=10, box_width=10):
    terminal = Mock(spec=TerminalInterface)
    terminal.width = width
    terminal.height = height
    terminal.prompt_box_width.return_value = box_width
    return terminal


def make_editor(**kwargs):
    terminal = kwargs.pop('terminal', None) or make_terminal()
    return Editor(terminal=terminal, clipboard=Mock(), **kwargs)


def press(editor, key_type, value):
    return editor._handle_key_event(KeyEvent(key_type, value, value))


def type_text(editor, text):
    for ch in text:
        press(editor, KeyType.REGULAR, ch)


def test_default_line_is_scrolling_with_box_width():
    editor = make_editor()
    assert isinstance(editor.line, ScrollingLine)
    assert editor.line.width == 10
    assert editor.prompt == "> "
    editor.terminal.prompt_box_width.assert_called_with("> ")


def test_line_mode_from_settings_and_override():
    editor = make_editor(settings={"line_mode": "truncated", "prompt": "$ "})
    assert isinstance(editor.line, TruncatedLine)
    assert editor.prompt == "$ "
    editor = make_editor(settings={"line_mode": "truncated"}, line_mode="static")
    assert type(editor.line) is UnboundedLine


def test_typing_and_submit_records_history():
    editor = make_editor()
    type_text(editor, "first line")
    press(editor, KeyType.SPECIAL, 'enter')
    assert editor.history == ["first line"]
    assert editor.line.is_empty()
    assert (editor.line.cursor, editor.line.offset) == (0, 0)


def test_empty_submit_is_not_recorded():
    editor = make_editor()
    press(editor, KeyType.SPECIAL, 'enter')
    assert editor.history == []


def test_history_limit_drops_oldest():
    editor = make_editor(settings={"history_limit": 2})
    for text in ("a", "b", "c"):
        editor.submit(text)
    assert editor.history == ["b", "c"]


def test_handle_resize_refits_viewport():
    terminal = make_terminal(box_width=10)
    editor = make_editor(terminal=terminal)
    type_text(editor, "abcdefghijklmnop")
    assert (editor.line.cursor, editor.line.offset) == (10, 6)

    terminal.prompt_box_width.return_value = 4
    editor.handle_resize()
    assert editor.line.width == 4
    # Absolute cursor 16 splits into offset 16 // 4 and column 16 % 4
    assert (editor.line.cursor, editor.line.offset) == (0, 4)
    assert editor.line.text == "abcdefghijklmnop"
    terminal.invalidate_frame.assert_called()


def test_help_is_dismissed_by_any_key():
    editor = make_editor()
    press(editor, KeyType.SPECIAL, 'f1')
    assert editor.help_visible
    assert not press(editor, KeyType.REGULAR, 'a')
    assert not editor.help_visible
    # The dismissing key is not typed
    assert editor.line.is_empty()


def test_failed_paste_sets_status_and_next_key_clears_it():
    editor = make_editor()
    editor.clipboard.paste_text.side_effect = ClipboardError("unavailable")
    type_text(editor, "abc")
    press(editor, KeyType.CTRL, 'v')
    assert editor.status_message == "Paste failed: unavailable"
    assert editor.line.text == "abc"
    press(editor, KeyType.SPECIAL, 'left')
    assert editor.status_message is None


def test_escape_is_ignored():
    editor = make_editor()
    type_text(editor, "x")
    assert not press(editor, KeyType.SPECIAL, 'escape')
    assert editor.line.text == "x"


def test_error_mode_only_allows_quit():
    editor = make_editor()
    editor.running = True
    editor.error_mode = True
    press(editor, KeyType.REGULAR, 'a')
    assert editor.line.is_empty()
    press(editor, KeyType.CTRL, 'q')
    assert editor.running is False


def test_terminal_too_small():
    editor = make_editor(terminal=make_terminal(width=10, height=10))
    assert editor._terminal_too_small()
    editor = make_editor(terminal=make_terminal(width=80, height=3))
    assert editor._terminal_too_small()
    assert not make_editor()._terminal_too_small()


def test_draw_dispatch():
    editor = make_editor()
    editor._draw()
    editor.terminal.draw_frame.assert_called_once_with(editor.history, editor.line, "> ", None)

    editor.status_message = "hello"
    editor._draw()
    editor.terminal.draw_frame.assert_called_with(editor.history, editor.line, "> ", " hello")

    editor.show_help()
    editor._draw()
    assert editor.terminal.draw_message.call_args[0][0][0] == "PROMPTLINE HELP"
