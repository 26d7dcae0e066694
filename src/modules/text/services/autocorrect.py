from __future__ import annotations

import logging
from typing import Optional

from ..domain.dictionary import DEFAULT_DICTIONARY, DictionaryHolder, DictionarySource, as_holder
from ..domain.interfaces import EditorBuffer
from ..domain.models import ORIGIN_SET_VALUE, TextCorrectionResult
from ..pipeline.correction import CorrectionPipeline, correct_text
from ..utils.stats import format_stats

logger = logging.getLogger(__name__)


class AutocorrectService:
    """Whole-document and single-line correction over an editor buffer."""

    def __init__(
        self,
        dictionary: DictionarySource = DEFAULT_DICTIONARY,
        *,
        pipeline: Optional[CorrectionPipeline] = None,
    ) -> None:
        self._dictionary = as_holder(dictionary)
        self._pipeline = pipeline

    @property
    def dictionary(self) -> DictionaryHolder:
        return self._dictionary

    def process(self, text: str) -> TextCorrectionResult:
        corrected, stats = correct_text(text, self._dictionary.current, pipeline=self._pipeline)
        return TextCorrectionResult(
            original_text=text,
            corrected_text=corrected,
            stats=stats,
            summary=format_stats(stats),
        )

    def correct_document(self, buffer: EditorBuffer) -> TextCorrectionResult:
        result = self.process(buffer.get_full_text())
        if result.changed:
            buffer.set_full_text(result.corrected_text, origin=ORIGIN_SET_VALUE)
        logger.info("Autocorrected document: %s", result.stats)
        return result

    def correct_line(self, buffer: EditorBuffer, line: int) -> TextCorrectionResult:
        result = self.process(buffer.get_line(line))
        if result.changed:
            buffer.set_line(line, result.corrected_text, origin=ORIGIN_SET_VALUE)
        return result
