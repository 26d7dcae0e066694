from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ..domain.models import GrammarIssue
from .buffer import TextBuffer

# Shared by every chat so a button from a replaced document never matches a newer check
_check_ids = itertools.count(1)


@dataclass
class DocumentSession:
    buffer: TextBuffer
    check_id: int = 0
    issues: Dict[int, GrammarIssue] = field(default_factory=dict)

    def track_issues(self, issues: Sequence[GrammarIssue]) -> int:
        """Remember the issues of a fresh grammar check, keyed by their position in the report."""
        self.check_id = next(_check_ids)
        self.issues = dict(enumerate(issues))
        return self.check_id

    def pending_issue(self, check_id: int, key: int) -> Optional[GrammarIssue]:
        if check_id != self.check_id:
            return None
        return self.issues.get(key)


class DocumentStore:
    """Keeps the current document of every chat in memory."""

    def __init__(self) -> None:
        self._sessions: Dict[int, DocumentSession] = {}

    def open(self, chat_id: int, text: str) -> DocumentSession:
        session = DocumentSession(buffer=TextBuffer(text))
        self._sessions[chat_id] = session
        return session

    def get(self, chat_id: int) -> Optional[DocumentSession]:
        return self._sessions.get(chat_id)

    def close(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
