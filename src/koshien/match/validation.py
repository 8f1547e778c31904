from __future__ import annotations

from koshien.contracts import (
    FIELDING_ABILITIES,
    PITCHING_ABILITIES,
    InvariantViolation,
    Position,
    RandomSource,
    RosterInvalid,
    RosterSnapshot,
    TeamSnapshot,
    ValidationIssue,
    ValidationResult,
)

REQUIRED_POSITIONS = frozenset(Position)
ABILITY_RANGE = (0, 100)
CONDITION_RANGE = (0.0, 100.0)


def _is_rating(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _blocking(code: str, field_path: str, entity_id: str, message: str) -> ValidationIssue:
    return ValidationIssue(code=code, severity="blocking", field_path=field_path, entity_id=entity_id, message=message)


def _warning(code: str, field_path: str, entity_id: str, message: str) -> ValidationIssue:
    return ValidationIssue(code=code, severity="warning", field_path=field_path, entity_id=entity_id, message=message)


class PreMatchValidator:
    def validate_match_input(
        self,
        home: TeamSnapshot,
        away: TeamSnapshot,
        random_source: RandomSource | None,
    ) -> ValidationResult:
        roster_issues: list[ValidationIssue] = []
        if random_source is None:
            roster_issues.append(
                _blocking(
                    "MISSING_RANDOM_SOURCE",
                    "random_source",
                    f"{away.team_id}@{home.team_id}",
                    "random source must be injected for match simulation",
                )
            )
        if home.team_id == away.team_id:
            roster_issues.append(
                _blocking("SAME_TEAM", "team_id", home.team_id, "home and away must be different teams")
            )
        roster_issues.extend(self._validate_roster(home))
        roster_issues.extend(self._validate_roster(away))
        roster_issues.extend(self._validate_shared_ids(home, away))
        self._raise_blocking(roster_issues, RosterInvalid)

        range_issues: list[ValidationIssue] = []
        for team in (home, away):
            for player in team.players:
                range_issues.extend(self._validate_ranges(player))
        self._raise_blocking(range_issues, InvariantViolation)

        warnings = [i for i in roster_issues + range_issues if i.severity != "blocking"]
        return ValidationResult(ok=True, issues=self._ordered(warnings))

    def _validate_roster(self, team: TeamSnapshot) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if not team.players:
            issues.append(_blocking("EMPTY_ROSTER", "players", team.team_id, "roster has no players"))
            return issues

        by_id: dict[str, RosterSnapshot] = {}
        for player in team.players:
            if player.player_id in by_id:
                issues.append(
                    _blocking("DUPLICATE_PLAYER_ID", "players.player_id", team.team_id, f"player id {player.player_id} appears twice")
                )
            by_id[player.player_id] = player

        if not team.batting_order:
            issues.append(_blocking("EMPTY_BATTING_ORDER", "batting_order", team.team_id, "batting order is empty"))

        seen: set[str] = set()
        positions: set[Position] = set()
        for player_id in team.batting_order:
            if player_id in seen:
                issues.append(
                    _blocking("DUPLICATE_BATTER", "batting_order", team.team_id, f"player {player_id} bats twice in the order")
                )
            seen.add(player_id)
            player = by_id.get(player_id)
            if player is None:
                issues.append(
                    _blocking("UNKNOWN_BATTER", "batting_order", team.team_id, f"batting order references unknown player {player_id}")
                )
                continue
            positions.add(player.position)
            if player.injured:
                issues.append(
                    _warning("INJURED_STARTER", "batting_order", player_id, f"{player.name} starts while injured")
                )

        if team.batting_order:
            for position in sorted(REQUIRED_POSITIONS - positions, key=lambda p: p.value):
                issues.append(
                    _blocking("MISSING_POSITION", "batting_order", team.team_id, f"no starter at position {position.value}")
                )

        pitcher = by_id.get(team.starting_pitcher_id) if team.starting_pitcher_id else None
        if pitcher is None:
            issues.append(
                _blocking(
                    "MISSING_PITCHER",
                    "starting_pitcher_id",
                    team.team_id,
                    f"designated pitcher '{team.starting_pitcher_id}' is not on the roster",
                )
            )
        elif not pitcher.can_pitch:
            issues.append(
                _blocking(
                    "PITCHER_WITHOUT_PITCHING",
                    "starting_pitcher_id",
                    pitcher.player_id,
                    f"{pitcher.name} has no pitching/control ratings",
                )
            )
        return issues

    def _validate_shared_ids(self, home: TeamSnapshot, away: TeamSnapshot) -> list[ValidationIssue]:
        shared = {p.player_id for p in home.players} & {p.player_id for p in away.players}
        return [
            _blocking("PLAYER_ON_BOTH_TEAMS", "players.player_id", player_id, "player id appears on both rosters")
            for player_id in sorted(shared)
        ]

    def _validate_ranges(self, player: RosterSnapshot) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        low, high = ABILITY_RANGE
        for name in FIELDING_ABILITIES + PITCHING_ABILITIES:
            value = getattr(player, name)
            if value is None and name in PITCHING_ABILITIES:
                continue
            if not _is_rating(value) or not low <= value <= high:
                issues.append(
                    _blocking("ABILITY_OUT_OF_RANGE", name, player.player_id, f"{name}={value!r} outside [{low}, {high}]")
                )
        low_c, high_c = CONDITION_RANGE
        for name in ("fatigue", "motivation"):
            value = getattr(player, name)
            if not _is_rating(value) or not low_c <= value <= high_c:
                issues.append(
                    _blocking("CONDITION_OUT_OF_RANGE", name, player.player_id, f"{name}={value!r} outside [{low_c}, {high_c}]")
                )
        return issues

    def _raise_blocking(self, issues: list[ValidationIssue], error_type: type[RosterInvalid] | type[InvariantViolation]) -> None:
        blocking = [i for i in self._ordered(issues) if i.severity == "blocking"]
        if blocking:
            raise error_type(blocking)

    def _ordered(self, issues: list[ValidationIssue]) -> list[ValidationIssue]:
        return sorted(issues, key=lambda x: (x.severity, x.code, x.entity_id, x.field_path))
