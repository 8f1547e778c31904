from __future__ import annotations

from koshien.contracts import Position, RosterSnapshot, TeamSnapshot
from koshien.org.entities import Player, Team


def snapshot_player(player: Player) -> RosterSnapshot:
    abilities = player.abilities
    condition = player.condition
    return RosterSnapshot(
        player_id=player.player_id,
        name=player.name,
        position=player.position,
        batting=abilities.batting,
        power=abilities.power,
        running=abilities.running,
        throwing=abilities.throwing,
        fielding=abilities.fielding,
        pitching=abilities.pitching,
        control=abilities.control,
        stamina=abilities.stamina,
        fatigue=condition.fatigue,
        motivation=condition.motivation,
        injured=condition.injured,
    )


def take_snapshot(team: Team) -> TeamSnapshot:
    """Freeze a live team into the read-only view a match is played from.

    Without an explicit starting pitcher the first rostered pitcher takes the mound.
    """
    pitcher_id = team.starting_pitcher_id
    if not pitcher_id:
        pitchers = team.players_at(Position.PITCHER)
        pitcher_id = pitchers[0].player_id if pitchers else ""
    return TeamSnapshot(
        team_id=team.team_id,
        name=team.name,
        players=tuple(snapshot_player(p) for p in team.players.values()),
        batting_order=tuple(team.lineup),
        starting_pitcher_id=pitcher_id,
    )
