from __future__ import annotations

from typing import Protocol, Sequence

from .models import ORIGIN_SET_VALUE, GrammarIssue, Position


class EditorBuffer(Protocol):
    def get_full_text(self) -> str:
        ...

    def set_full_text(self, text: str, *, origin: str = ORIGIN_SET_VALUE) -> None:
        ...

    def get_line(self, line: int) -> str:
        ...

    def set_line(self, line: int, text: str, *, origin: str = ORIGIN_SET_VALUE) -> None:
        ...

    def get_cursor(self) -> Position:
        ...

    def replace_range(self, text: str, start: Position, end: Position, *, origin: str = ORIGIN_SET_VALUE) -> None:
        ...

    def offset_to_position(self, offset: int) -> Position:
        ...


class GrammarChecker(Protocol):
    async def check(self, text: str, *, language: str) -> Sequence[GrammarIssue]:
        """Return the issues the remote service found in ``text``."""


class Notifier(Protocol):
    async def notify(self, message: str) -> None:
        """Show a short transient message to the user."""
