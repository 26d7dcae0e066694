from __future__ import annotations

import re
from typing import Mapping, Optional

# Word tokens follow ``\w``: letters (Unicode included), digits and underscore.
# Apostrophes split tokens, so "don't" is looked up as "don" and "t".
RE_WORD = re.compile(r"\w+")
RE_SENTENCE_START = re.compile(r"([.!?]\s+|\n)([^\W\d_])")
RE_TRAILING_WORD = re.compile(r"(\w+)(\W+)$")


def match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def upper_letter(char: str) -> str:
    """Upper-case a single lowercase letter; anything else comes back unchanged."""
    if not char.islower():
        return char
    upper = char.upper()
    # "ß".upper() == "SS" would shift every offset after it.
    return upper if len(upper) == 1 else char


def replace_words(text: str, dictionary: Mapping[str, str]) -> tuple[str, int]:
    replaced = 0

    def _repl(match: re.Match[str]) -> str:
        nonlocal replaced
        word = match.group(0)
        canonical = dictionary.get(word.lower())
        if canonical is None:
            return word
        fixed = match_case(word, canonical)
        if fixed != word:
            replaced += 1
        return fixed

    return RE_WORD.sub(_repl, text), replaced


def capitalize_sentence_starts(text: str) -> tuple[str, int]:
    capitalized = 0

    def _repl(match: re.Match[str]) -> str:
        nonlocal capitalized
        letter = upper_letter(match.group(2))
        if letter != match.group(2):
            capitalized += 1
        return match.group(1) + letter

    text = RE_SENTENCE_START.sub(_repl, text)
    if text:
        first = upper_letter(text[0])
        if first != text[0]:
            capitalized += 1
            text = first + text[1:]
    return text, capitalized


def find_word_before(line: str, column: int) -> Optional[tuple[int, int]]:
    """
    Locate the word that ends just before the non-word run leading up to ``column``.

    Returns ``(start, end)`` offsets into ``line`` or ``None`` when the prefix
    is empty, ends inside a word, or contains no word at all.
    """
    prefix = line[: max(0, column)]
    match = RE_TRAILING_WORD.search(prefix)
    if match is None:
        return None
    return match.start(1), match.end(1)
