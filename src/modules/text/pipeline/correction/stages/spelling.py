from __future__ import annotations

from ..context import CorrectionContext
from ..pipeline import CorrectionStage
from ..text_utils import replace_words


class SpellingStage(CorrectionStage):
    """Swaps known misspellings for their dictionary spelling, keeping the leading capital."""

    name = "spelling"

    def apply(self, context: CorrectionContext) -> None:
        text, replaced = replace_words(context.text, context.dictionary)
        context.set_text(text)
        context.add_stat("spelling", replaced)
