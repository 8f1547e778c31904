from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence


class Position(str, Enum):
    PITCHER = "P"
    CATCHER = "C"
    FIRST_BASE = "1B"
    SECOND_BASE = "2B"
    THIRD_BASE = "3B"
    SHORTSTOP = "SS"
    LEFT_FIELD = "LF"
    CENTER_FIELD = "CF"
    RIGHT_FIELD = "RF"


class HalfInning(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class AtBatOutcome(str, Enum):
    HOME_RUN = "home_run"
    HIT = "hit"
    WALK = "walk"
    OUT = "out"


class HitKind(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class OutKind(str, Enum):
    STRIKEOUT = "strikeout"
    GROUNDOUT = "groundout"
    FLYOUT = "flyout"


class RandomSource(Protocol):
    def rand(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, items: Sequence[Any]) -> Any: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


FIELDING_ABILITIES = ("batting", "power", "running", "throwing", "fielding")
PITCHING_ABILITIES = ("pitching", "control", "stamina")


@dataclass(frozen=True, slots=True)
class RosterSnapshot:
    player_id: str
    name: str
    position: Position
    batting: int
    power: int
    running: int
    throwing: int
    fielding: int
    pitching: int | None = None
    control: int | None = None
    stamina: int | None = None
    fatigue: float = 0.0
    motivation: float = 100.0
    injured: bool = False

    @property
    def can_pitch(self) -> bool:
        return self.pitching is not None and self.control is not None


@dataclass(frozen=True, slots=True)
class TeamSnapshot:
    team_id: str
    name: str
    players: tuple[RosterSnapshot, ...]
    batting_order: tuple[str, ...]
    starting_pitcher_id: str

    def player(self, player_id: str) -> RosterSnapshot:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise KeyError(f"player '{player_id}' is not on team '{self.team_id}'")

    @property
    def starting_pitcher(self) -> RosterSnapshot:
        return self.player(self.starting_pitcher_id)


@dataclass(slots=True)
class BaseState:
    first: bool = False
    second: bool = False
    third: bool = False

    def as_tuple(self) -> tuple[bool, bool, bool]:
        return (self.first, self.second, self.third)

    def occupied_count(self) -> int:
        return sum(self.as_tuple())

    def is_loaded(self) -> bool:
        return self.first and self.second and self.third

    def clear(self) -> None:
        self.first = False
        self.second = False
        self.third = False


@dataclass(frozen=True, slots=True)
class GamePhase:
    inning: int
    half: HalfInning | None

    @property
    def is_over(self) -> bool:
        return self.half is None

    @staticmethod
    def top(inning: int) -> GamePhase:
        return GamePhase(inning=inning, half=HalfInning.TOP)

    @staticmethod
    def bottom(inning: int) -> GamePhase:
        return GamePhase(inning=inning, half=HalfInning.BOTTOM)

    @staticmethod
    def game_over(inning: int) -> GamePhase:
        return GamePhase(inning=inning, half=None)


@dataclass(slots=True)
class PlayerPerformance:
    player_id: str
    name: str
    team_id: str
    at_bats: int = 0
    hits: int = 0
    home_runs: int = 0
    walks: int = 0


@dataclass(frozen=True, slots=True)
class BattingLine:
    player_id: str
    name: str
    team_id: str
    at_bats: int
    hits: int
    home_runs: int
    walks: int


@dataclass(frozen=True, slots=True)
class PlayEvent:
    inning: int
    half: HalfInning
    batting_team_id: str
    batter_id: str
    batter_name: str
    outcome: AtBatOutcome
    runs_scored: int
    outs_after: int
    bases_after: tuple[bool, bool, bool]
    description: str


@dataclass(frozen=True, slots=True)
class InningResult:
    inning: int
    top_runs: int
    bottom_runs: int
    events: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MatchResult:
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    innings: tuple[InningResult, ...]
    mvp: str
    highlights: tuple[str, ...]
    mvp_player_id: str = ""
    batting_lines: tuple[BattingLine, ...] = ()
    home_team_id: str = ""
    away_team_id: str = ""

    @property
    def winner(self) -> str | None:
        if self.home_score > self.away_score:
            return self.home_team
        if self.away_score > self.home_score:
            return self.away_team
        return None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["innings"] = [
            {**inning, "events": list(inning["events"])} for inning in payload["innings"]
        ]
        payload["highlights"] = list(self.highlights)
        payload["batting_lines"] = list(payload["batting_lines"])
        return payload


@dataclass(frozen=True, slots=True)
class RulesProfile:
    name: str
    regulation_innings: int = 9
    outs_per_half: int = 3
    mvp_hit_points: int = 2
    mvp_home_run_points: int = 5
    mvp_walk_points: int = 1
    max_plate_appearances_per_half: int = 200

    def validate(self) -> None:
        if self.regulation_innings < 1:
            raise ValueError("regulation_innings must be at least 1")
        if self.outs_per_half < 1:
            raise ValueError("outs_per_half must be at least 1")
        if min(self.mvp_hit_points, self.mvp_home_run_points, self.mvp_walk_points) < 0:
            raise ValueError("mvp weights must not be negative")
        if self.max_plate_appearances_per_half < self.outs_per_half:
            raise ValueError("max_plate_appearances_per_half must allow a full half-inning")


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


class RosterInvalid(ValidationError):
    """Roster cannot field a legal team; raised before any simulation."""


class InvariantViolation(ValidationError):
    """Caller supplied values outside their defined range."""


@dataclass(slots=True)
class ForensicArtifact:
    artifact_id: str
    timestamp: datetime
    engine_scope: str
    error_code: str
    message: str
    state_snapshot: Mapping[str, Any]
    context: Mapping[str, Any]
    identifiers: Mapping[str, str]
    causal_fragment: Sequence[str] = field(default_factory=list)
