from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping, Optional, TypeVar

from ..domain.errors import GrammarCheckError
from ..domain.interfaces import EditorBuffer, GrammarChecker, Notifier
from ..domain.models import ORIGIN_GRAMMAR_FIX, GrammarIssue, GrammarReport
from ..infrastructure.languagetool import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

ERROR_NOTICE = "Error checking grammar."

K = TypeVar("K")


class GrammarCheckService:
    def __init__(self, checker: GrammarChecker, *, language: str = DEFAULT_LANGUAGE) -> None:
        self._checker = checker
        self._language = language

    @property
    def language(self) -> str:
        return self._language

    async def check(self, text: str, notifier: Notifier) -> Optional[GrammarReport]:
        """Run one remote check; failures are reported to the user once and yield ``None``."""
        try:
            issues = await self._checker.check(text, language=self._language)
        except GrammarCheckError:
            logger.exception("Grammar check failed")
            await notifier.notify(ERROR_NOTICE)
            return None
        return GrammarReport(language=self._language, issues=tuple(issues))

    async def check_document(self, buffer: EditorBuffer, notifier: Notifier) -> Optional[GrammarReport]:
        return await self.check(buffer.get_full_text(), notifier)

    @staticmethod
    def apply_fix(buffer: EditorBuffer, issue: GrammarIssue, replacement: Optional[str] = None) -> bool:
        value = replacement if replacement is not None else issue.suggestion
        if value is None:
            return False
        buffer.replace_range(
            value,
            buffer.offset_to_position(issue.offset),
            buffer.offset_to_position(issue.end),
            origin=ORIGIN_GRAMMAR_FIX,
        )
        return True


def rebase_issues(
    issues: Mapping[K, GrammarIssue], applied: K, replacement: str
) -> dict[K, GrammarIssue]:
    """
    Drop the ``applied`` issue and re-anchor the others after its fix went in.

    Issues after the fixed span move by the length difference; issues that
    overlap it no longer point at the text they described and are dropped.
    Keys are kept, so a fix button keeps naming the same issue.
    """
    fixed = issues[applied]
    delta = len(replacement) - fixed.length
    remaining: dict[K, GrammarIssue] = {}
    for key, issue in issues.items():
        if key == applied:
            continue
        if issue.end <= fixed.offset:
            remaining[key] = issue
        elif issue.offset >= fixed.end:
            remaining[key] = replace(issue, offset=issue.offset + delta)
    return remaining
