from __future__ import annotations

from koshien.contracts import Position, RandomSource
from koshien.org.entities import Player, PlayerAbilities, Team

DEFAULT_SURNAMES = [
    "Tanaka",
    "Suzuki",
    "Takahashi",
    "Watanabe",
    "Ito",
    "Yamamoto",
    "Nakamura",
    "Kobayashi",
    "Kato",
    "Yoshida",
    "Yamada",
    "Sasaki",
    "Matsumoto",
    "Inoue",
    "Kimura",
]

BATTING_ORDER_POSITIONS = [
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


def _rating(random_source: RandomSource) -> int:
    return random_source.randint(40, 69)


def build_demo_player(player_id: str, name: str, position: Position, random_source: RandomSource) -> Player:
    abilities = PlayerAbilities(
        batting=_rating(random_source),
        power=_rating(random_source),
        running=_rating(random_source),
        throwing=_rating(random_source),
        fielding=_rating(random_source),
    )
    if position is Position.PITCHER:
        abilities.pitching = _rating(random_source)
        abilities.control = _rating(random_source)
        abilities.stamina = _rating(random_source)
    return Player(
        player_id=player_id,
        name=name,
        position=position,
        grade=random_source.randint(1, 3),
        abilities=abilities,
        potential=random_source.randint(1, 5),
    )


def build_demo_team(team_id: str, name: str, random_source: RandomSource) -> Team:
    team = Team(team_id=team_id, name=name)
    rng = random_source.spawn(f"roster:{team_id}")
    for idx, position in enumerate(BATTING_ORDER_POSITIONS, start=1):
        surname = rng.choice(DEFAULT_SURNAMES)
        player = build_demo_player(f"{team_id}_P{idx:02d}", f"{surname} {idx}", position, rng)
        team.add_player(player)
    if not team.set_lineup(list(team.players)):
        raise RuntimeError(f"demo team {team_id} failed lineup rules")
    pitcher = team.players_at(Position.PITCHER)[0]
    team.set_starting_pitcher(pitcher.player_id)
    return team
