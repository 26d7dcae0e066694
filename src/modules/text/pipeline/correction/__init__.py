from __future__ import annotations

from typing import Dict, Optional, Sequence

from ...domain.dictionary import DEFAULT_DICTIONARY, SpellingDictionary
from .context import CorrectionContext
from .pipeline import CorrectionPipeline, CorrectionStage, PipelineResult
from .registry import StageRegistry, default_registry, register_stage
from .stages.capitalization import CapitalizationStage
from .stages.spelling import SpellingStage
from .text_utils import capitalize_sentence_starts, replace_words


def _register_builtin_stages() -> None:
    names = set(default_registry.list_stage_names())
    if SpellingStage.name not in names:
        register_stage(SpellingStage, name=SpellingStage.name)
    if CapitalizationStage.name not in names:
        register_stage(CapitalizationStage, name=CapitalizationStage.name)


_register_builtin_stages()


_PIPELINE_CACHE: tuple[int, CorrectionPipeline] | None = None


def _get_default_pipeline() -> CorrectionPipeline:
    global _PIPELINE_CACHE
    version = default_registry.version
    if _PIPELINE_CACHE is None or _PIPELINE_CACHE[0] != version:
        pipeline = default_registry.create_pipeline()
        _PIPELINE_CACHE = (version, pipeline)
    return _PIPELINE_CACHE[1]


def correct_text(
    text: str,
    dictionary: SpellingDictionary = DEFAULT_DICTIONARY,
    *,
    pipeline: Optional[CorrectionPipeline] = None,
) -> tuple[str, Dict[str, int]]:
    """Run spelling correction followed by sentence capitalization."""
    pipe = pipeline or _get_default_pipeline()
    result = pipe.run(text, dictionary)
    return result.text, result.stats


def correct_words(text: str, dictionary: SpellingDictionary = DEFAULT_DICTIONARY) -> str:
    return replace_words(text, dictionary)[0]


def capitalize_sentences(text: str) -> str:
    return capitalize_sentence_starts(text)[0]


def run_pipeline(
    text: str,
    stages: Sequence[CorrectionStage],
    dictionary: SpellingDictionary = DEFAULT_DICTIONARY,
) -> PipelineResult:
    return CorrectionPipeline(stages).run(text, dictionary)


__all__ = [
    "CapitalizationStage",
    "CorrectionContext",
    "CorrectionPipeline",
    "CorrectionStage",
    "PipelineResult",
    "SpellingStage",
    "StageRegistry",
    "capitalize_sentences",
    "correct_text",
    "correct_words",
    "default_registry",
    "register_stage",
    "run_pipeline",
]
