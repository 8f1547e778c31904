from __future__ import annotations

import hashlib
import random
from typing import Any, Sequence

from koshien.contracts import RandomSource

RecordedDraw = tuple[str, float]


class PythonRandomSource(RandomSource):
    """Injected randomness source for gameplay and test determinism."""

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    def rand(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        return self._rng.choice(items)

    def spawn(self, substream_id: str) -> RandomSource:
        seed = self._seed
        if seed is None:
            return PythonRandomSource(seed=None)
        digest = hashlib.sha256(f"{seed}:{substream_id}".encode("ascii", "ignore")).hexdigest()
        child_seed = int(digest[:16], 16)
        return PythonRandomSource(seed=child_seed)


class RecordingRandomSource(RandomSource):
    """Wraps another source and keeps every primitive draw so a match can be replayed."""

    def __init__(self, inner: RandomSource, draws: list[RecordedDraw] | None = None) -> None:
        self._inner = inner
        self.draws: list[RecordedDraw] = draws if draws is not None else []

    def rand(self) -> float:
        value = self._inner.rand()
        self.draws.append(("rand", value))
        return value

    def randint(self, a: int, b: int) -> int:
        value = self._inner.randint(a, b)
        self.draws.append(("randint", value))
        return value

    def choice(self, items: Sequence[Any]) -> Any:
        item = self._inner.choice(items)
        self.draws.append(("choice", items.index(item)))
        return item

    def spawn(self, substream_id: str) -> RandomSource:
        return RecordingRandomSource(self._inner.spawn(substream_id), self.draws)


class ReplayRandomSource(RandomSource):
    """Plays back draws captured by RecordingRandomSource, in order."""

    def __init__(self, draws: Sequence[RecordedDraw]) -> None:
        self._draws = list(draws)
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._draws) - self._cursor

    def rand(self) -> float:
        return float(self._next("rand"))

    def randint(self, a: int, b: int) -> int:
        value = int(self._next("randint"))
        if not a <= value <= b:
            raise ValueError(f"replayed randint {value} outside [{a}, {b}]")
        return value

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        index = int(self._next("choice"))
        if index >= len(items):
            raise ValueError(f"replayed choice index {index} outside {len(items)} items")
        return items[index]

    def spawn(self, substream_id: str) -> RandomSource:
        return self

    def _next(self, kind: str) -> float:
        if self._cursor >= len(self._draws):
            raise ValueError(f"replay exhausted after {len(self._draws)} draws")
        recorded_kind, value = self._draws[self._cursor]
        if recorded_kind != kind:
            raise ValueError(f"replay draw {self._cursor} is '{recorded_kind}', expected '{kind}'")
        self._cursor += 1
        return value


def seeded_random(seed: int) -> PythonRandomSource:
    return PythonRandomSource(seed=seed)
