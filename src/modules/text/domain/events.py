from __future__ import annotations

from typing import Callable, List

from .interfaces import EditorBuffer
from .models import ChangeEvent


ChangeListener = Callable[[EditorBuffer, ChangeEvent], object]


class ChangeNotifier:
    """Minimal change bus between an editor host and its listeners."""

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, buffer: EditorBuffer, change: ChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(buffer, change)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
