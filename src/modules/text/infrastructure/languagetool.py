from __future__ import annotations

import asyncio
import logging
from bisect import bisect_left
from dataclasses import replace
from typing import Any, List, Optional

import aiohttp

from ..domain.errors import GrammarCheckError
from ..domain.interfaces import GrammarChecker
from ..domain.models import GrammarIssue

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.languagetoolplus.com/v2/check"
DEFAULT_LANGUAGE = "en-US"


class LanguageToolClient(GrammarChecker):
    """Client for the LanguageTool ``/v2/check`` HTTP endpoint."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str = DEFAULT_API_URL,
        *,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._session = session
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def check(self, text: str, *, language: str = DEFAULT_LANGUAGE) -> List[GrammarIssue]:
        form = {"text": text, "language": language}
        try:
            async with self._session.post(self._url, data=form, timeout=self._timeout) as response:
                if response.status >= 400:
                    raise GrammarCheckError(f"LanguageTool responded with HTTP {response.status}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise GrammarCheckError("LanguageTool request failed") from exc
        except ValueError as exc:
            raise GrammarCheckError("LanguageTool returned a non-JSON body") from exc

        issues = parse_matches(payload, text)
        logger.debug("LanguageTool reported %d issue(s) for %d chars", len(issues), len(text))
        return issues


def utf16_boundaries(text: str) -> List[int]:
    """UTF-16 offset of every character boundary in ``text`` (``len(text) + 1`` entries)."""
    boundaries = [0]
    for char in text:
        boundaries.append(boundaries[-1] + (2 if ord(char) > 0xFFFF else 1))
    return boundaries


def parse_matches(payload: Any, text: Optional[str] = None) -> List[GrammarIssue]:
    """
    Turn a ``/v2/check`` response into issues.

    LanguageTool counts ``offset`` and ``length`` in UTF-16 code units. When
    the checked ``text`` is given they are converted to ``str`` indices, so
    an emoji before an issue does not shift the span a fix replaces.
    """
    if not isinstance(payload, dict):
        raise GrammarCheckError("Unexpected LanguageTool response shape")
    matches = payload.get("matches") or []
    if not isinstance(matches, list):
        raise GrammarCheckError("LanguageTool 'matches' must be a list")
    issues = [_parse_match(match) for match in matches]
    if text is None or all(ord(char) <= 0xFFFF for char in text):
        return issues

    boundaries = utf16_boundaries(text)
    converted: List[GrammarIssue] = []
    for issue in issues:
        start = bisect_left(boundaries, issue.offset)
        end = bisect_left(boundaries, issue.end)
        converted.append(replace(issue, offset=start, length=max(end - start, 0)))
    return converted


def _parse_match(match: Any) -> GrammarIssue:
    if not isinstance(match, dict):
        raise GrammarCheckError("LanguageTool match must be an object")
    try:
        message = str(match["message"])
        offset = int(match["offset"])
        length = int(match["length"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GrammarCheckError(f"Malformed LanguageTool match: {match!r}") from exc
    if offset < 0 or length < 0:
        raise GrammarCheckError(f"Negative offset or length in LanguageTool match: {match!r}")

    replacements = tuple(
        item["value"]
        for item in match.get("replacements") or []
        if isinstance(item, dict) and isinstance(item.get("value"), str)
    )
    rule = match.get("rule")
    context = match.get("context")
    return GrammarIssue(
        message=message,
        offset=offset,
        length=length,
        replacements=replacements,
        rule_id=rule.get("id") if isinstance(rule, dict) else None,
        context=context.get("text") if isinstance(context, dict) else None,
    )
