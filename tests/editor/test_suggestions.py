# tests/editor/test_suggestions.py
"""Tests for mention and emoji trigger detection."""

import pytest

from beam_stage.editor import get_suggestion_data
from beam_stage.editor.suggestions import NO_SUGGESTION


@pytest.mark.parametrize(
    ("text", "caret", "expected"),
    [
        ("hello @al", 9, (True, 6, "mention", "al")),
        ("hi :smi", 7, (True, 3, "emoji", "smi")),
        ("type :sm", 8, (True, 5, "emoji", "sm")),
        ("@", 1, (True, 0, "mention", "")),
        ("line one\n:tada", 14, (True, 9, "emoji", "tada")),
        ("@alice and @bo more", 14, (True, 11, "mention", "bo")),
    ],
)
def test_detects_triggers(text, caret, expected) -> None:
    data = get_suggestion_data(text, caret)
    assert (data.keystroke_triggered, data.trigger_idx, data.type, data.query) == expected


@pytest.mark.parametrize(
    ("text", "caret"),
    [
        ("hello world", 11),
        ("no trigger here", 15),
        ("hello @al ", 10),
        ("", 0),
        ("email me@example.com", 20),
        ("tab\t", 4),
    ],
)
def test_no_trigger(text, caret) -> None:
    assert get_suggestion_data(text, caret) == NO_SUGGESTION


def test_only_text_before_caret_counts() -> None:
    data = get_suggestion_data("@alice", 3)
    assert data.query == "al"
    assert data.trigger_idx == 0


def test_caret_is_clamped() -> None:
    assert get_suggestion_data("x :a", 100).query == "a"
    assert get_suggestion_data("@a", -5) == NO_SUGGESTION
