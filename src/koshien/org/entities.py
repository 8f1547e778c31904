from __future__ import annotations

import math
from dataclasses import dataclass, field

from koshien.contracts import FIELDING_ABILITIES, PITCHING_ABILITIES, Position, RandomSource

ABILITY_CAP = 100
REQUIRED_LINEUP_POSITIONS = frozenset(Position)
TEAM_TRAINING_TEAMWORK = 2
SETTLED_LINEUP_STABILITY = 75
UNSETTLED_LINEUP_STABILITY = 50


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(slots=True)
class PlayerAbilities:
    batting: int
    power: int
    running: int
    throwing: int
    fielding: int
    pitching: int | None = None
    control: int | None = None
    stamina: int | None = None


@dataclass(slots=True)
class PlayerCondition:
    fatigue: float = 0.0
    motivation: float = 100.0
    injured: bool = False


@dataclass(slots=True)
class Player:
    player_id: str
    name: str
    position: Position
    grade: int
    abilities: PlayerAbilities
    condition: PlayerCondition = field(default_factory=PlayerCondition)
    potential: int = 3

    def train(self, ability: str, random_source: RandomSource) -> int:
        if ability not in FIELDING_ABILITIES + PITCHING_ABILITIES:
            raise ValueError(f"unknown ability '{ability}'")
        if self.condition.fatigue >= 100:
            return 0
        current = getattr(self.abilities, ability)
        if current is None:
            return 0

        improved = min(ABILITY_CAP, current + random_source.randint(1, 3))
        self.condition.fatigue = _clamp(self.condition.fatigue + 10)
        if random_source.rand() < self.potential / 10:
            improved = min(ABILITY_CAP, improved + 1)
        setattr(self.abilities, ability, improved)
        return improved - current

    def rest(self) -> None:
        self.condition.fatigue = _clamp(self.condition.fatigue - 30)
        self.condition.motivation = _clamp(self.condition.motivation + 10)

    def injure(self) -> None:
        self.condition.injured = True
        self.condition.motivation = max(50.0, self.condition.motivation - 20)

    def heal(self) -> None:
        self.condition.injured = False
        self.condition.motivation = _clamp(self.condition.motivation + 10)

    def update_motivation(self, change: float) -> None:
        self.condition.motivation = _clamp(self.condition.motivation + change)


@dataclass(slots=True)
class TeamRating:
    offense: int = 50
    defense: int = 50
    pitching: int = 50
    teamwork: int = 50
    morale: int = 50


@dataclass(slots=True)
class Team:
    team_id: str
    name: str
    players: dict[str, Player] = field(default_factory=dict)
    lineup: list[str] = field(default_factory=list)
    starting_pitcher_id: str = ""
    funds: int = 1_000_000
    fan_support: float = 50.0
    rating: TeamRating = field(default_factory=TeamRating)
    teamwork_bonus: int = 0

    def __post_init__(self) -> None:
        self.refresh_rating()

    def add_player(self, player: Player) -> None:
        self.players[player.player_id] = player
        self.refresh_rating()

    def remove_player(self, player_id: str) -> bool:
        if self.players.pop(player_id, None) is None:
            return False
        self.lineup = [pid for pid in self.lineup if pid != player_id]
        if self.starting_pitcher_id == player_id:
            self.starting_pitcher_id = ""
        self.refresh_rating()
        return True

    def players_at(self, position: Position) -> list[Player]:
        return [p for p in self.players.values() if p.position is position]

    def set_lineup(self, player_ids: list[str]) -> bool:
        if any(pid not in self.players for pid in player_ids):
            return False
        if len(set(player_ids)) != len(player_ids):
            return False
        positions = {self.players[pid].position for pid in player_ids}
        if not REQUIRED_LINEUP_POSITIONS <= positions:
            return False
        self.lineup = list(player_ids)
        self.refresh_rating()
        return True

    def set_starting_pitcher(self, player_id: str) -> bool:
        player = self.players.get(player_id)
        if player is None or player.abilities.pitching is None or player.abilities.control is None:
            return False
        self.starting_pitcher_id = player_id
        return True

    def update_funds(self, amount: int) -> None:
        self.funds += amount

    def update_fan_support(self, change: float) -> None:
        self.fan_support = _clamp(self.fan_support + change)

    def conduct_team_training(self, random_source: RandomSource) -> dict[str, tuple[str, int]]:
        """Train one randomly drawn fielding ability per player.

        Every session also adds a lasting teamwork bonus. Returns the trained
        ability and its gain per player id.
        """
        gains: dict[str, tuple[str, int]] = {}
        for player_id, player in self.players.items():
            ability = random_source.choice(FIELDING_ABILITIES)
            gains[player_id] = (ability, player.train(ability, random_source))
        self.teamwork_bonus += TEAM_TRAINING_TEAMWORK
        self.refresh_rating()
        return gains

    def refresh_rating(self) -> None:
        # An empty roster keeps the previous rating.
        if not self.players:
            return
        count = len(self.players)
        pitchers = self.players_at(Position.PITCHER)
        offense = sum((p.abilities.batting + p.abilities.power) / 2 for p in self.players.values())
        defense = sum((p.abilities.fielding + p.abilities.throwing) / 2 for p in self.players.values())
        pitching = sum(((p.abilities.pitching or 0) + (p.abilities.control or 0)) / 2 for p in pitchers)
        morale = sum(p.condition.motivation for p in self.players.values())

        rating = self.rating
        rating.offense = _round_half_up(offense / count)
        rating.defense = _round_half_up(defense / count)
        rating.pitching = _round_half_up(pitching / max(1, len(pitchers)))
        rating.morale = _round_half_up(morale / count)
        stability = SETTLED_LINEUP_STABILITY if len(self.lineup) == len(REQUIRED_LINEUP_POSITIONS) else UNSETTLED_LINEUP_STABILITY
        rating.teamwork = min(100, _round_half_up((rating.morale + stability) / 2) + self.teamwork_bonus)
