"""Autocomplete trigger detection for @-mentions and :emoji: shortcodes."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

SuggestionType = Literal["mention", "emoji"]

TRIGGERS: dict[str, SuggestionType] = {
    "@": "mention",
    ":": "emoji",
}

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class SuggestionData:
    """Result of scanning the word under the caret.

    ``trigger_idx`` is the offset of the trigger character and ``query`` the
    text typed after it. Both are ``-1`` and ``""`` when nothing is triggered.
    """

    keystroke_triggered: bool
    trigger_idx: int
    type: SuggestionType | None
    query: str


NO_SUGGESTION = SuggestionData(keystroke_triggered=False, trigger_idx=-1, type=None, query="")


def get_suggestion_data(text: str, caret_offset: int) -> SuggestionData:
    """Detect whether the word ending at the caret starts with a trigger.

    The word is everything between the last whitespace before the caret and
    the caret itself; its first character decides the trigger.

    >>> get_suggestion_data("hello @al", 9)
    SuggestionData(keystroke_triggered=True, trigger_idx=6, type='mention', query='al')
    """
    caret_offset = max(0, min(caret_offset, len(text)))
    text_before_caret = text[:caret_offset]
    last_token = _WHITESPACE.split(text_before_caret)[-1]
    if not last_token:
        return NO_SUGGESTION

    trigger_type = TRIGGERS.get(last_token[0])
    if trigger_type is None:
        return NO_SUGGESTION

    return SuggestionData(
        keystroke_triggered=True,
        trigger_idx=len(text_before_caret) - len(last_token),
        type=trigger_type,
        query=last_token[1:],
    )
