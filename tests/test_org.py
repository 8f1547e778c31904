from __future__ import annotations

import pytest

from koshien.contracts import FIELDING_ABILITIES, Position
from koshien.core import PythonRandomSource
from koshien.match import PreMatchValidator
from koshien.org import Player, PlayerAbilities, PlayerCondition, Team, TeamRating, build_demo_team, take_snapshot
from koshien.org.bootstrap import BATTING_ORDER_POSITIONS
from tests.helpers import ScriptedRandomSource


def _player(player_id="P1", position=Position.SHORTSTOP, **abilities) -> Player:
    values = {"batting": 50, "power": 50, "running": 50, "throwing": 50, "fielding": 50}
    values.update(abilities)
    return Player(player_id=player_id, name=f"Player {player_id}", position=position, grade=2, abilities=PlayerAbilities(**values))


def _full_team() -> Team:
    team = Team(team_id="T", name="Test High")
    for idx, position in enumerate(BATTING_ORDER_POSITIONS, start=1):
        extra = {"pitching": 60, "control": 55, "stamina": 50} if position is Position.PITCHER else {}
        team.add_player(_player(f"T{idx}", position, **extra))
    return team


def test_training_gain_with_potential_bonus():
    player = _player()
    gain = player.train("batting", ScriptedRandomSource([0.1]))

    assert gain == 2
    assert player.abilities.batting == 52
    assert player.condition.fatigue == 10


def test_training_gain_without_bonus():
    player = _player()
    assert player.train("power", ScriptedRandomSource([0.9])) == 1
    assert player.abilities.power == 51


def test_training_is_capped_at_one_hundred():
    player = _player(running=100)
    assert player.train("running", ScriptedRandomSource([0.1])) == 0
    assert player.abilities.running == 100


def test_exhausted_player_cannot_train():
    player = _player()
    player.condition.fatigue = 100
    assert player.train("batting", ScriptedRandomSource([0.1])) == 0
    assert player.abilities.batting == 50


def test_fielder_has_no_pitching_to_train():
    player = _player()
    assert player.train("pitching", ScriptedRandomSource([0.1])) == 0
    assert player.abilities.pitching is None


def test_unknown_ability_rejected():
    with pytest.raises(ValueError):
        _player().train("charisma", ScriptedRandomSource([0.1]))


def test_rest_injure_heal_and_motivation_clamps():
    player = _player()
    player.condition = PlayerCondition(fatigue=50, motivation=95)

    player.rest()
    assert (player.condition.fatigue, player.condition.motivation) == (20, 100)

    player.condition.motivation = 60
    player.injure()
    assert player.condition.injured
    assert player.condition.motivation == 50

    player.heal()
    assert not player.condition.injured
    assert player.condition.motivation == 60

    player.update_motivation(-500)
    assert player.condition.motivation == 0


def test_lineup_requires_all_positions_without_duplicates():
    team = _full_team()
    ids = list(team.players)

    assert not team.set_lineup(ids[:-1])
    assert not team.set_lineup(ids[:-1] + [ids[0]])
    assert not team.set_lineup(ids[:-1] + ["ghost"])
    assert team.set_lineup(ids)
    assert team.lineup == ids


def test_starting_pitcher_needs_pitching_ratings():
    team = _full_team()
    assert not team.set_starting_pitcher("T1")
    assert not team.set_starting_pitcher("ghost")
    assert team.set_starting_pitcher("T9")
    assert team.starting_pitcher_id == "T9"


def test_remove_player_clears_lineup_and_pitcher():
    team = _full_team()
    team.set_lineup(list(team.players))
    team.set_starting_pitcher("T9")

    assert team.remove_player("T9")
    assert "T9" not in team.lineup
    assert team.starting_pitcher_id == ""
    assert not team.remove_player("T9")


def test_funds_and_fan_support():
    team = _full_team()
    team.update_funds(-250_000)
    team.update_fan_support(80)
    assert team.funds == 750_000
    assert team.fan_support == 100


def test_snapshot_falls_back_to_first_pitcher():
    team = _full_team()
    team.set_lineup(list(team.players))

    snapshot = take_snapshot(team)

    assert snapshot.starting_pitcher_id == "T9"
    assert snapshot.starting_pitcher.pitching == 60
    assert snapshot.batting_order == tuple(team.lineup)


def test_snapshot_is_detached_from_live_team():
    team = _full_team()
    team.set_lineup(list(team.players))
    snapshot = take_snapshot(team)

    team.players["T1"].abilities.batting = 99
    assert snapshot.player("T1").batting == 50


def test_demo_team_is_deterministic_and_match_ready():
    first = build_demo_team("HOME", "Seishun High", PythonRandomSource(seed=5))
    second = build_demo_team("HOME", "Seishun High", PythonRandomSource(seed=5))

    assert take_snapshot(first) == take_snapshot(second)
    assert len(first.players) == 9
    assert first.starting_pitcher_id == "HOME_P09"
    assert all(40 <= p.abilities.batting <= 69 for p in first.players.values())

    away = take_snapshot(build_demo_team("AWAY", "Koei Academy", PythonRandomSource(seed=5)))
    result = PreMatchValidator().validate_match_input(take_snapshot(first), away, PythonRandomSource(seed=5))
    assert result.ok


def test_empty_team_keeps_neutral_rating():
    assert Team(team_id="E", name="Empty").rating == TeamRating()


def test_rating_tracks_roster_and_lineup():
    team = _full_team()
    rating = team.rating

    assert (rating.offense, rating.defense, rating.morale) == (50, 50, 100)
    # lone pitcher at (60 + 55) / 2 rounds half up
    assert rating.pitching == 58
    assert rating.teamwork == 75

    team.set_lineup(list(team.players))
    assert team.rating.teamwork == 88


def test_removing_pitcher_recomputes_rating():
    team = _full_team()
    team.set_lineup(list(team.players))

    team.remove_player("T9")

    assert team.rating.pitching == 0
    assert team.rating.teamwork == 75


def test_adding_player_recomputes_rating():
    team = _full_team()
    team.add_player(_player("T10", Position.LEFT_FIELD, batting=95, power=95))
    # (9 * 50 + 95) / 10 = 54.5
    assert team.rating.offense == 55


def test_team_training_trains_everyone_and_builds_teamwork():
    team = _full_team()
    team.set_lineup(list(team.players))

    gains = team.conduct_team_training(ScriptedRandomSource([0.9]))

    assert gains == {pid: ("batting", 1) for pid in team.players}
    assert all(p.abilities.batting == 51 and p.condition.fatigue == 10 for p in team.players.values())
    assert team.rating.offense == 51
    assert team.rating.teamwork == 90


def test_team_training_only_draws_fielding_abilities():
    team = _full_team()
    gains = team.conduct_team_training(PythonRandomSource(seed=8))

    assert {ability for ability, _ in gains.values()} <= set(FIELDING_ABILITIES)
    assert team.players["T9"].abilities.pitching == 60


def test_teamwork_is_capped():
    team = _full_team()
    team.set_lineup(list(team.players))
    for _ in range(10):
        team.conduct_team_training(ScriptedRandomSource([0.9]))
    assert team.rating.teamwork == 100
