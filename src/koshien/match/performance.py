from __future__ import annotations

from typing import Iterator

from koshien.contracts import AtBatOutcome, BattingLine, PlayerPerformance, RosterSnapshot


class PerformanceAggregator:
    """Per-player plate appearance counters for one match, in first-appearance order."""

    def __init__(self) -> None:
        self._lines: dict[str, PlayerPerformance] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[PlayerPerformance]:
        return iter(self._lines.values())

    def get(self, player_id: str) -> PlayerPerformance | None:
        return self._lines.get(player_id)

    def record(self, batter: RosterSnapshot, team_id: str, outcome: AtBatOutcome) -> PlayerPerformance:
        line = self._lines.get(batter.player_id)
        if line is None:
            line = PlayerPerformance(player_id=batter.player_id, name=batter.name, team_id=team_id)
            self._lines[batter.player_id] = line

        if outcome is AtBatOutcome.HOME_RUN:
            line.home_runs += 1
            line.hits += 1
            line.at_bats += 1
        elif outcome is AtBatOutcome.HIT:
            line.hits += 1
            line.at_bats += 1
        elif outcome is AtBatOutcome.WALK:
            line.walks += 1
        elif outcome is AtBatOutcome.OUT:
            line.at_bats += 1
        return line

    def batting_lines(self) -> tuple[BattingLine, ...]:
        return tuple(
            BattingLine(
                player_id=p.player_id,
                name=p.name,
                team_id=p.team_id,
                at_bats=p.at_bats,
                hits=p.hits,
                home_runs=p.home_runs,
                walks=p.walks,
            )
            for p in self._lines.values()
        )
