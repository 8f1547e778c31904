from __future__ import annotations

from collections import defaultdict
from typing import Callable, DefaultDict

from koshien.contracts import AtBatOutcome, PlayEvent

PlayHandler = Callable[[PlayEvent], None]


class EventBus:
    """Synchronous fan-out of plate-appearance events to in-process subscribers."""

    def __init__(self) -> None:
        self._play_handlers: list[PlayHandler] = []
        self._counter: DefaultDict[AtBatOutcome, int] = defaultdict(int)

    def subscribe_play(self, handler: PlayHandler) -> None:
        self._play_handlers.append(handler)

    def publish_play(self, event: PlayEvent) -> None:
        self._counter[event.outcome] += 1
        for handler in self._play_handlers:
            handler(event)

    def emitted_count(self, outcome: AtBatOutcome | None = None) -> int:
        if outcome is None:
            return sum(self._counter.values())
        return self._counter[outcome]
