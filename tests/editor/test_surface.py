# tests/editor/test_surface.py
"""Tests for the in-memory editing surface."""

import pytest

from beam_stage.editor import TextBuffer
from beam_stage.editor.surface import caret_position


def test_caret_position_lines() -> None:
    text = "first\nsecond\nthird"
    assert caret_position(text, 0).line_number == 1
    position = caret_position(text, 8)
    assert (position.line_number, position.column, position.offset) == (2, 2, 8)
    assert caret_position(text, 999).offset == len(text)


def test_replace_line_moves_caret_after_text() -> None:
    buffer = TextBuffer("a\nb\nc", caret_offset=2)
    buffer.replace_line(2, "BBB")
    assert buffer.get_value() == "a\nBBB\nc"
    assert buffer.get_caret().offset == 5


def test_replace_line_out_of_range() -> None:
    buffer = TextBuffer("only")
    with pytest.raises(IndexError):
        buffer.replace_line(2, "x")


def test_detach() -> None:
    buffer = TextBuffer("x")
    assert buffer.attached
    buffer.detach()
    assert not buffer.attached
