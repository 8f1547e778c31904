from __future__ import annotations

from koshien.contracts import BaseState


class BaseOutTracker:
    """Outs and base occupancy for the half-inning in progress."""

    def __init__(self, outs_per_half: int = 3) -> None:
        self._outs_per_half = outs_per_half
        self.outs = 0
        self.bases = BaseState()

    @property
    def is_side_retired(self) -> bool:
        return self.outs >= self._outs_per_half

    def record_out(self) -> None:
        self.outs += 1

    def reset(self) -> None:
        self.outs = 0
        self.bases.clear()

    def snapshot(self) -> dict[str, object]:
        return {"outs": self.outs, "bases": list(self.bases.as_tuple())}
