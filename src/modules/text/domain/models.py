from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

ORIGIN_INPUT = "+input"
ORIGIN_SET_VALUE = "setValue"
ORIGIN_AUTOCORRECT = "autocorrect"
ORIGIN_GRAMMAR_FIX = "grammar-fix"

# Edits carrying one of these origins were made by code, not typed by the user.
PROGRAMMATIC_ORIGINS = frozenset({ORIGIN_SET_VALUE, ORIGIN_AUTOCORRECT, ORIGIN_GRAMMAR_FIX})


def is_programmatic(origin: Optional[str]) -> bool:
    return not origin or origin in PROGRAMMATIC_ORIGINS


@dataclass(frozen=True, order=True)
class Position:
    line: int
    ch: int


@dataclass(frozen=True)
class ChangeEvent:
    text: str
    origin: Optional[str] = ORIGIN_INPUT


@dataclass(frozen=True)
class LiveCorrection:
    line: int
    start: int
    end: int
    original: str
    replacement: str
    capitalized_next: bool = False

    @property
    def replaced(self) -> bool:
        return self.original != self.replacement


@dataclass(frozen=True)
class TextCorrectionResult:
    original_text: str
    corrected_text: str
    stats: dict[str, int]
    summary: str

    @property
    def changed(self) -> bool:
        return self.original_text != self.corrected_text


@dataclass(frozen=True)
class GrammarIssue:
    message: str
    offset: int
    length: int
    replacements: tuple[str, ...] = ()
    rule_id: Optional[str] = None
    context: Optional[str] = None

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def suggestion(self) -> Optional[str]:
        """First replacement offered by the service, used as the one-click fix."""
        return self.replacements[0] if self.replacements else None


@dataclass(frozen=True)
class GrammarReport:
    language: str
    issues: tuple[GrammarIssue, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.issues
