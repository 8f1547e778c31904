from __future__ import annotations

from dataclasses import replace
from itertools import cycle
from typing import Any, Iterable, Sequence

from koshien.contracts import Position, RandomSource, RosterSnapshot, TeamSnapshot

LINEUP_POSITIONS = [
    Position.CENTER_FIELD,
    Position.SECOND_BASE,
    Position.SHORTSTOP,
    Position.FIRST_BASE,
    Position.THIRD_BASE,
    Position.LEFT_FIELD,
    Position.RIGHT_FIELD,
    Position.CATCHER,
    Position.PITCHER,
]


class ScriptedRandomSource(RandomSource):
    """Returns scripted draws in order (cycling); choice always takes the first item."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self._iter = cycle(self._values)
        self.draws = 0

    def rand(self) -> float:
        self.draws += 1
        return next(self._iter)

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, items: Sequence[Any]) -> Any:
        return items[0]

    def spawn(self, substream_id: str) -> RandomSource:
        return self


def make_player(player_id: str, position: Position, **overrides: Any) -> RosterSnapshot:
    base = RosterSnapshot(
        player_id=player_id,
        name=f"Player {player_id}",
        position=position,
        batting=50,
        power=50,
        running=50,
        throwing=50,
        fielding=50,
    )
    if position is Position.PITCHER:
        base = replace(base, pitching=50, control=50, stamina=50)
    return replace(base, **overrides)


def make_team(team_id: str, name: str | None = None, **batter_overrides: Any) -> TeamSnapshot:
    players = tuple(
        make_player(f"{team_id}{idx}", position, **batter_overrides)
        for idx, position in enumerate(LINEUP_POSITIONS, start=1)
    )
    return TeamSnapshot(
        team_id=team_id,
        name=name or f"Team {team_id}",
        players=players,
        batting_order=tuple(p.player_id for p in players),
        starting_pitcher_id=f"{team_id}9",
    )


def all_outs(count: int = 3) -> list[float]:
    return [0.99] * count
