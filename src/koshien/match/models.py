from __future__ import annotations

from dataclasses import dataclass, field

from koshien.contracts import AtBatOutcome, HalfInning, HitKind, OutKind


@dataclass(frozen=True, slots=True)
class AtBatResolution:
    outcome: AtBatOutcome
    runs_scored: int
    description: str
    hit_chance: float
    hit_kind: HitKind | None = None
    out_kind: OutKind | None = None


@dataclass(slots=True)
class HalfInningResult:
    inning: int
    half: HalfInning
    batting_team_id: str
    runs: int = 0
    outs: int = 0
    resolutions: list[AtBatResolution] = field(default_factory=list)

    @property
    def events(self) -> list[str]:
        return [r.description for r in self.resolutions]

    @property
    def plate_appearances(self) -> int:
        return len(self.resolutions)
