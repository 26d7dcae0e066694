from __future__ import annotations

from typing import List, Optional

from ..domain.events import ChangeNotifier
from ..domain.interfaces import EditorBuffer
from ..domain.models import ORIGIN_INPUT, ORIGIN_SET_VALUE, ChangeEvent, Position


class TextBuffer(EditorBuffer):
    """
    In-memory editor buffer with a single cursor.

    Behaves like a code editor document: replacing text before the cursor
    shifts the cursor, and every mutation is announced on the attached
    ``ChangeNotifier`` together with the origin of the edit.
    """

    def __init__(self, text: str = "", *, notifier: Optional[ChangeNotifier] = None) -> None:
        self._lines: List[str] = text.split("\n")
        self._cursor = Position(0, 0)
        self._notifier = notifier

    @property
    def notifier(self) -> Optional[ChangeNotifier]:
        return self._notifier

    def get_full_text(self) -> str:
        return "\n".join(self._lines)

    def set_full_text(self, text: str, *, origin: str = ORIGIN_SET_VALUE) -> None:
        cursor_offset = self.position_to_offset(self._cursor)
        self._lines = text.split("\n")
        self._cursor = self.offset_to_position(cursor_offset)
        self._emit(text, origin)

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, line: int) -> str:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return ""

    def set_line(self, line: int, text: str, *, origin: str = ORIGIN_SET_VALUE) -> None:
        if not 0 <= line < len(self._lines):
            raise IndexError(f"line {line} out of range")
        end = Position(line, len(self._lines[line]))
        self.replace_range(text, Position(line, 0), end, origin=origin)

    def get_cursor(self) -> Position:
        return self._cursor

    def set_cursor(self, position: Position) -> None:
        self._cursor = self._clamp(position)

    def position_to_offset(self, position: Position) -> int:
        pos = self._clamp(position)
        return sum(len(line) + 1 for line in self._lines[: pos.line]) + pos.ch

    def offset_to_position(self, offset: int) -> Position:
        remaining = max(0, offset)
        for index, line in enumerate(self._lines):
            if remaining <= len(line):
                return Position(index, remaining)
            remaining -= len(line) + 1
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def replace_range(self, text: str, start: Position, end: Position, *, origin: str = ORIGIN_SET_VALUE) -> None:
        start_offset = self.position_to_offset(start)
        end_offset = self.position_to_offset(end)
        if end_offset < start_offset:
            start_offset, end_offset = end_offset, start_offset
        cursor_offset = self.position_to_offset(self._cursor)

        full = self.get_full_text()
        self._lines = (full[:start_offset] + text + full[end_offset:]).split("\n")

        if cursor_offset >= end_offset:
            cursor_offset += len(text) - (end_offset - start_offset)
        elif cursor_offset > start_offset:
            cursor_offset = start_offset + len(text)
        self._cursor = self.offset_to_position(cursor_offset)
        self._emit(text, origin)

    def type_text(self, text: str) -> None:
        """Insert ``text`` at the cursor as if the user had typed it."""
        cursor = self._cursor
        self.replace_range(text, cursor, cursor, origin=ORIGIN_INPUT)

    def _clamp(self, position: Position) -> Position:
        line = min(max(0, position.line), len(self._lines) - 1)
        ch = min(max(0, position.ch), len(self._lines[line]))
        return Position(line, ch)

    def _emit(self, text: str, origin: str) -> None:
        if self._notifier is not None:
            self._notifier.emit(self, ChangeEvent(text=text, origin=origin))
