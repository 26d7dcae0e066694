from __future__ import annotations

from ..context import CorrectionContext
from ..pipeline import CorrectionStage
from ..text_utils import capitalize_sentence_starts


class CapitalizationStage(CorrectionStage):
    name = "capitalization"
    runs_after = ("spelling",)

    def apply(self, context: CorrectionContext) -> None:
        text, capitalized = capitalize_sentence_starts(context.text)
        context.set_text(text)
        context.add_stat("capitalization", capitalized)
