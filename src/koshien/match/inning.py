from __future__ import annotations

import logging

from koshien.contracts import HalfInning, RosterSnapshot, TeamSnapshot
from koshien.core import EngineIntegrityError, build_forensic_artifact
from koshien.match.bases import BaseOutTracker
from koshien.match.models import HalfInningResult
from koshien.match.resolver import AtBatResolver

logger = logging.getLogger(__name__)


class BattingOrder:
    """Wrapping cursor over a team's batting order; persists across innings."""

    def __init__(self, team: TeamSnapshot) -> None:
        self._batters: tuple[RosterSnapshot, ...] = tuple(team.player(pid) for pid in team.batting_order)
        self._cursor = 0

    def next_batter(self) -> RosterSnapshot:
        batter = self._batters[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._batters)
        return batter


class HalfInningDriver:
    def __init__(
        self,
        resolver: AtBatResolver,
        tracker: BaseOutTracker,
        *,
        max_plate_appearances: int = 200,
    ) -> None:
        self._resolver = resolver
        self._tracker = tracker
        self._max_plate_appearances = max_plate_appearances

    def play(
        self,
        inning: int,
        half: HalfInning,
        batting_team: TeamSnapshot,
        lineup: BattingOrder,
        pitcher: RosterSnapshot,
    ) -> HalfInningResult:
        self._tracker.reset()
        result = HalfInningResult(inning=inning, half=half, batting_team_id=batting_team.team_id)

        while not self._tracker.is_side_retired:
            if result.plate_appearances >= self._max_plate_appearances:
                raise self._runaway(result)
            batter = lineup.next_batter()
            resolution = self._resolver.resolve(
                batter,
                pitcher,
                self._tracker,
                inning=inning,
                half=half,
                batting_team_id=batting_team.team_id,
            )
            result.resolutions.append(resolution)
            result.runs += resolution.runs_scored

        result.outs = self._tracker.outs
        logger.debug(
            "inning %d %s: %s scored %d in %d plate appearances",
            inning,
            half.value,
            batting_team.team_id,
            result.runs,
            result.plate_appearances,
        )
        return result

    def _runaway(self, result: HalfInningResult) -> EngineIntegrityError:
        message = (
            f"half-inning {result.inning} {result.half.value} reached {result.plate_appearances} "
            "plate appearances without retiring the side"
        )
        logger.error(message)
        artifact = build_forensic_artifact(
            engine_scope="half_inning",
            error_code="RUNAWAY_HALF_INNING",
            message=message,
            state_snapshot={**self._tracker.snapshot(), "runs": result.runs},
            context={"inning": result.inning, "half": result.half.value},
            identifiers={"batting_team_id": result.batting_team_id},
            causal_fragment=[r.outcome.value for r in result.resolutions[-10:]],
        )
        return EngineIntegrityError(artifact)
