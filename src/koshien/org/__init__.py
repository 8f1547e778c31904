from .bootstrap import build_demo_player, build_demo_team
from .entities import Player, PlayerAbilities, PlayerCondition, Team, TeamRating
from .snapshot import snapshot_player, take_snapshot

__all__ = [
    "Player",
    "PlayerAbilities",
    "PlayerCondition",
    "Team",
    "TeamRating",
    "build_demo_player",
    "build_demo_team",
    "snapshot_player",
    "take_snapshot",
]
