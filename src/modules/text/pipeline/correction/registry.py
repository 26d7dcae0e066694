from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .pipeline import CorrectionPipeline, CorrectionStage, check_stage_order

StageFactory = Callable[[], CorrectionStage]


class StageRegistry:
    """
    Ordered stage factories for the default correction pipeline.

    Stages run in registration order. A stage class may list the stages it
    has to follow in ``runs_after``; a registration that would break that
    order (capitalizing before the spelling pass, say) is refused.
    """

    def __init__(self) -> None:
        self._entries: List[tuple[str, StageFactory]] = []
        self._version: int = 0

    def register(self, factory: StageFactory, *, name: Optional[str] = None, replace: bool = False) -> None:
        key = name or getattr(factory, "name", None) or factory.__name__
        names = self.list_stage_names()
        if key in names and not replace:
            raise ValueError(f"Stage '{key}' is already registered")

        if key in names:
            # Swapping an implementation keeps its slot in the order
            entries = [(k, factory if k == key else f) for (k, f) in self._entries]
        else:
            entries = self._entries + [(key, factory)]
        check_stage_order([(k, getattr(f, "runs_after", ())) for (k, f) in entries])

        self._entries = entries
        self._version += 1

    def create_pipeline(self) -> CorrectionPipeline:
        return CorrectionPipeline([factory() for _, factory in self._entries])

    def list_stage_names(self) -> Sequence[str]:
        return [name for name, _ in self._entries]

    @property
    def version(self) -> int:
        return self._version


default_registry = StageRegistry()


def register_stage(factory: StageFactory, *, name: Optional[str] = None, replace: bool = False) -> None:
    default_registry.register(factory, name=name, replace=replace)
