from .types import (
    FIELDING_ABILITIES,
    PITCHING_ABILITIES,
    AtBatOutcome,
    BaseState,
    BattingLine,
    ForensicArtifact,
    GamePhase,
    HalfInning,
    HitKind,
    InningResult,
    InvariantViolation,
    MatchResult,
    OutKind,
    PlayerPerformance,
    PlayEvent,
    Position,
    RandomSource,
    RosterInvalid,
    RosterSnapshot,
    RulesProfile,
    TeamSnapshot,
    ValidationError,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "FIELDING_ABILITIES",
    "PITCHING_ABILITIES",
    "AtBatOutcome",
    "BaseState",
    "BattingLine",
    "ForensicArtifact",
    "GamePhase",
    "HalfInning",
    "HitKind",
    "InningResult",
    "InvariantViolation",
    "MatchResult",
    "OutKind",
    "PlayEvent",
    "PlayerPerformance",
    "Position",
    "RandomSource",
    "RosterInvalid",
    "RosterSnapshot",
    "RulesProfile",
    "TeamSnapshot",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
]
