from __future__ import annotations

from typing import Sequence

from ..domain.models import GrammarIssue

NO_ISSUES_TEXT = "No grammar issues found 🎉"


def format_issue(issue: GrammarIssue) -> str:
    line = f"❌ {issue.message}"
    if issue.suggestion is not None:
        line += f" (fix → {issue.suggestion})"
    return line


def format_grammar_report(issues: Sequence[GrammarIssue]) -> str:
    if not issues:
        return NO_ISSUES_TEXT
    lines = ["Grammar issues:"]
    lines.extend(f"{index}. {format_issue(issue)}" for index, issue in enumerate(issues, start=1))
    return "\n".join(lines)
