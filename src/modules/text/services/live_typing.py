from __future__ import annotations

import logging
from typing import Callable, Optional

from ..domain.dictionary import DEFAULT_DICTIONARY, DictionarySource, as_holder
from ..domain.events import ChangeNotifier
from ..domain.interfaces import EditorBuffer
from ..domain.models import ORIGIN_AUTOCORRECT, ChangeEvent, LiveCorrection, Position, is_programmatic
from ..pipeline.correction import correct_words
from ..pipeline.correction.text_utils import find_word_before, upper_letter

logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = frozenset(" .,!?")
SENTENCE_END_CHARACTERS = frozenset(".!?")


class LiveTypingCorrector:
    """
    Corrects the word just finished by the user.

    Fires on user edits whose last typed character is a trigger (space or
    punctuation). Only the span of the preceding word is rewritten; after a
    sentence-ending mark the character under the cursor is upper-cased too.
    Edits made here carry ``ORIGIN_AUTOCORRECT`` and are ignored when they
    come back through the change notifier.
    """

    def __init__(self, dictionary: DictionarySource = DEFAULT_DICTIONARY) -> None:
        self._dictionary = as_holder(dictionary)

    def subscribe(self, notifier: ChangeNotifier) -> Callable[[], None]:
        return notifier.subscribe(self.handle_change)

    def handle_change(self, buffer: EditorBuffer, change: ChangeEvent) -> Optional[LiveCorrection]:
        if is_programmatic(change.origin) or not change.text:
            return None
        trigger = change.text[-1]
        if trigger not in TRIGGER_CHARACTERS:
            return None

        cursor = buffer.get_cursor()
        line = buffer.get_line(cursor.line)
        span = find_word_before(line, cursor.ch) if line and cursor.ch > 0 else None
        if span is None:
            return None

        start, end = span
        word = line[start:end]
        replacement = correct_words(word, self._dictionary.current)
        if replacement != word:
            buffer.replace_range(
                replacement,
                Position(cursor.line, start),
                Position(cursor.line, end),
                origin=ORIGIN_AUTOCORRECT,
            )
            logger.debug("Live autocorrect %r -> %r on line %d", word, replacement, cursor.line)

        capitalized = trigger in SENTENCE_END_CHARACTERS and self._capitalize_next(buffer)
        if replacement == word and not capitalized:
            return None
        return LiveCorrection(
            line=cursor.line,
            start=start,
            end=end,
            original=word,
            replacement=replacement,
            capitalized_next=capitalized,
        )

    @staticmethod
    def _capitalize_next(buffer: EditorBuffer) -> bool:
        # Re-read the cursor: the word replacement may have moved it.
        cursor = buffer.get_cursor()
        line = buffer.get_line(cursor.line)
        if cursor.ch >= len(line):
            return False
        char = line[cursor.ch]
        upper = upper_letter(char)
        if upper == char:
            return False
        buffer.replace_range(
            upper,
            Position(cursor.line, cursor.ch),
            Position(cursor.line, cursor.ch + 1),
            origin=ORIGIN_AUTOCORRECT,
        )
        return True
