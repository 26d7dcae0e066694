from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ...domain.dictionary import DEFAULT_DICTIONARY, SpellingDictionary
from .context import CorrectionContext


@dataclass
class PipelineResult:
    text: str
    stats: dict[str, int]
    context: CorrectionContext


class CorrectionStage:
    name: str
    # Stages that have to see the text first whenever they are in the same pipeline
    runs_after: Tuple[str, ...] = ()

    def apply(self, context: CorrectionContext) -> None:
        raise NotImplementedError


def check_stage_order(stages: Sequence[tuple[str, Sequence[str]]]) -> None:
    """Raise ``ValueError`` if a stage comes before one it has to run after."""
    names = [name for name, _ in stages]
    for position, (name, runs_after) in enumerate(stages):
        for required in runs_after:
            if required in names[position + 1 :]:
                raise ValueError(f"Stage '{name}' must run after '{required}'")


class CorrectionPipeline:
    def __init__(self, stages: Sequence[CorrectionStage]):
        self._stages: List[CorrectionStage] = list(stages)
        check_stage_order([(stage.name, stage.runs_after) for stage in self._stages])

    @property
    def stages(self) -> Sequence[CorrectionStage]:
        return tuple(self._stages)

    @property
    def stage_names(self) -> Sequence[str]:
        return tuple(stage.name for stage in self._stages)

    def run(
        self,
        text: str,
        dictionary: SpellingDictionary = DEFAULT_DICTIONARY,
        *,
        context: CorrectionContext | None = None,
    ) -> PipelineResult:
        ctx = context or CorrectionContext(text=text, dictionary=dictionary)
        ctx.original_text = text
        ctx.set_text(text)
        for stage in self._stages:
            stage.apply(ctx)
        return PipelineResult(text=ctx.text, stats=dict(ctx.stats), context=ctx)

    def replace(self, stages: Iterable[CorrectionStage]) -> "CorrectionPipeline":
        return CorrectionPipeline(stages=list(stages))
