"""Editing surface abstraction.

The upload and suggestion helpers only need to read and replace text and to
know where the caret is. ``EditingSurface`` captures that contract so the
helpers work against any widget; ``TextBuffer`` is the in-memory version.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CaretPosition:
    """Caret location as both a line/column pair and an absolute offset.

    ``line_number`` is 1-based, ``column`` and ``offset`` are 0-based.
    """

    line_number: int
    column: int
    offset: int


def caret_position(text: str, offset: int) -> CaretPosition:
    """Translate an absolute offset in ``text`` into a ``CaretPosition``."""
    offset = max(0, min(offset, len(text)))
    before = text[:offset]
    line_start = before.rfind("\n") + 1
    return CaretPosition(
        line_number=before.count("\n") + 1,
        column=offset - line_start,
        offset=offset,
    )


class EditingSurface(Protocol):
    """Minimal text-editing surface the editor helpers operate on."""

    @property
    def attached(self) -> bool:
        """False once the surface has been closed or unmounted."""
        ...

    def get_value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def get_caret(self) -> CaretPosition: ...

    def replace_line(self, line_number: int, text: str) -> None: ...


class TextBuffer:
    """In-memory ``EditingSurface``."""

    def __init__(self, value: str = "", caret_offset: int | None = None) -> None:
        self._value = value
        self._caret = len(value) if caret_offset is None else max(0, min(caret_offset, len(value)))
        self._attached = True

    @property
    def attached(self) -> bool:
        return self._attached

    def detach(self) -> None:
        """Mark the surface as closed; pending uploads stop writing to it."""
        self._attached = False

    def get_value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value
        self._caret = min(self._caret, len(value))

    def get_caret(self) -> CaretPosition:
        return caret_position(self._value, self._caret)

    def set_caret(self, offset: int) -> None:
        self._caret = max(0, min(offset, len(self._value)))

    def replace_line(self, line_number: int, text: str) -> None:
        """Replace the whole of line ``line_number`` and put the caret after it.

        Raises:
            IndexError: If the line does not exist.
        """
        lines = self._value.split("\n")
        if not 1 <= line_number <= len(lines):
            raise IndexError(f"Line {line_number} is out of range")
        lines[line_number - 1] = text
        self._value = "\n".join(lines)
        self._caret = sum(len(line) + 1 for line in lines[: line_number - 1]) + len(text)
