"""Randomized operation sequences checking line invariants."""

import random

import pytest
from promptline.line import ScrollingLine, UnboundedLine

ALPHABET = "ab cd\té"


def random_operation(rng):
    """Pick one operation as (method name, args)."""
    name = rng.choice([
        "insert_char", "insert_str", "delete_before_cursor", "move_left",
        "move_right", "word_left", "word_right", "jump_to_start",
        "jump_to_end", "resize", "flush",
    ])
    if name == "insert_char":
        return name, (rng.choice(ALPHABET),)
    if name == "insert_str":
        return name, ("".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 12))),)
    if name == "resize":
        return name, (rng.randint(0, 12),)
    return name, ()


def assert_scroll_invariants(line):
    length = len(line.text)
    assert 0 <= line.cursor <= line.width
    assert 0 <= line.offset <= max(0, length - line.width)
    assert line.offset + line.cursor <= length
    assert line.render_text() == line.text[line.offset:]


@pytest.mark.parametrize("seed", range(40))
def test_scrolling_line_invariants_hold(seed):
    rng = random.Random(seed)
    line = ScrollingLine(rng.randint(0, 10))
    for _ in range(300):
        name, args = random_operation(rng)
        getattr(line, name)(*args)
        assert_scroll_invariants(line)


@pytest.mark.parametrize("seed", range(20))
def test_unbounded_line_cursor_stays_in_text(seed):
    rng = random.Random(seed)
    line = UnboundedLine()
    for _ in range(300):
        name, args = random_operation(rng)
        getattr(line, name)(*args)
        assert 0 <= line.cursor <= len(line.text)
        assert line.render_text() == line.text


@pytest.mark.parametrize("seed", range(20))
def test_scrolling_line_edits_like_unbounded_line(seed):
    """Character edits and moves touch the same text positions in both variants."""
    rng = random.Random(seed)
    scrolling = ScrollingLine(rng.randint(1, 8))
    unbounded = UnboundedLine()
    operations = ["insert_char", "delete_before_cursor", "move_left",
                  "move_right", "jump_to_start", "jump_to_end"]
    for _ in range(300):
        name = rng.choice(operations)
        args = (rng.choice(ALPHABET),) if name == "insert_char" else ()
        getattr(scrolling, name)(*args)
        getattr(unbounded, name)(*args)
        assert scrolling.text == unbounded.text
        assert scrolling.absolute_cursor == unbounded.absolute_cursor


@pytest.mark.parametrize("cls", [UnboundedLine, lambda: ScrollingLine(4)])
def test_flush_returns_exact_content(cls):
    line = cls()
    line.insert_str("some content")
    line.move_left()
    line.insert_char("X")
    expected = line.text
    assert line.flush() == expected
    assert line.is_empty()


def test_jump_round_trip_resets_viewport():
    rng = random.Random(7)
    for _ in range(50):
        line = ScrollingLine(rng.randint(0, 6), "".join(rng.choice(ALPHABET) for _ in range(20)))
        line.jump_to_end()
        line.jump_to_start()
        assert (line.cursor, line.offset) == (0, 0)
