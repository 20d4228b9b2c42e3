"""
Text buffer capability used by the workflows, plus an in-memory implementation.

``apply_edits`` is all-or-nothing: edits are applied in order to a working
copy, and the buffer only changes if every edit succeeds.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Sequence

from .planner import EditKind, EditOperation, Position

logger = logging.getLogger(__name__)

_NEWLINE = re.compile(r"\r?\n")


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = _NEWLINE.split(text)
    if lines[-1] == "":
        lines.pop()     # trailing newline ends the last line
    return lines


class TextBuffer(ABC):
    @property
    @abstractmethod
    def line_count(self) -> int:
        pass

    @abstractmethod
    def line_at(self, index: int) -> str:
        pass

    @abstractmethod
    def apply_edits(self, edits: Sequence[EditOperation]) -> bool:
        """Apply *edits* atomically. Returns False and changes nothing on failure."""
        pass

    def lines(self) -> list[str]:
        return [self.line_at(i) for i in range(self.line_count)]


class InMemoryBuffer(TextBuffer):
    """A buffer over a string.

    Lines are separated by ``\\n`` or ``\\r\\n`` only; every other character,
    including each line's original ending, is kept as-is.  Inserted text uses
    the buffer's newline style.
    """

    def __init__(self, text: str = "") -> None:
        self.newline = "\r\n" if "\r\n" in text else "\n"
        self._text = text
        self._lines = _split_lines(text)

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "InMemoryBuffer":
        return cls("\n".join(lines))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, index: int) -> str:
        return self._lines[index]

    @property
    def text(self) -> str:
        return self._text

    def apply_edits(self, edits: Sequence[EditOperation]) -> bool:
        text = self._text
        try:
            for edit in edits:
                start = self._offset(text, edit.position, allow_end=False)
                if edit.kind is EditKind.INSERT:
                    insert = edit.text.replace("\r\n", "\n").replace("\n", self.newline)
                    text = text[:start] + insert + text[start:]
                elif edit.kind is EditKind.DELETE_RANGE:
                    if edit.range_end is None:
                        raise ValueError("delete without range end")
                    end = self._offset(text, edit.range_end)
                    if end < start:
                        raise ValueError(f"inverted range {edit.position} -> {edit.range_end}")
                    text = text[:start] + text[end:]
                else:
                    raise ValueError(f"unsupported edit kind {edit.kind!r}")
        except ValueError as e:
            logger.error("[Buffer] Edit batch rejected: %s", e)
            return False

        self._text = text
        self._lines = _split_lines(text)
        return True

    @staticmethod
    def _offset(text: str, position: Position, allow_end: bool = True) -> int:
        lines = _split_lines(text)
        line, column = position
        if allow_end and line == len(lines) and column == 0:
            return len(text)
        if not 0 <= line < len(lines) or not 0 <= column <= len(lines[line]):
            raise ValueError(f"position {tuple(position)} outside buffer")
        starts = [0] + [m.end() for m in _NEWLINE.finditer(text)]
        return starts[line] + column
