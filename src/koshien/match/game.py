from __future__ import annotations

import logging

from koshien.contracts import (
    GamePhase,
    HalfInning,
    MatchResult,
    RandomSource,
    RulesProfile,
    TeamSnapshot,
)
from koshien.core import EventBus, get_rules_profile
from koshien.match.bases import BaseOutTracker
from koshien.match.compiler import ResultCompiler
from koshien.match.inning import BattingOrder, HalfInningDriver
from koshien.match.models import HalfInningResult
from koshien.match.performance import PerformanceAggregator
from koshien.match.resolver import AtBatResolver
from koshien.match.validation import PreMatchValidator

logger = logging.getLogger(__name__)


def advance_phase(phase: GamePhase, home_score: int, away_score: int, regulation_innings: int = 9) -> GamePhase:
    """Next state after ``phase`` completes.

    Both halves of every inning are always played; the game can only end after
    a bottom half from the regulation inning on, and only if the score is not tied.
    """
    if phase.is_over:
        return phase
    if phase.half is HalfInning.TOP:
        return GamePhase.bottom(phase.inning)
    if phase.inning < regulation_innings or home_score == away_score:
        return GamePhase.top(phase.inning + 1)
    return GamePhase.game_over(phase.inning)


class MatchSimulator:
    """Plays one match between two roster snapshots.

    An instance owns all working state of its match (bases, outs, batting
    order cursors, performance counters) and can be simulated once.
    """

    def __init__(
        self,
        home: TeamSnapshot,
        away: TeamSnapshot,
        random_source: RandomSource,
        *,
        rules: RulesProfile | None = None,
        event_bus: EventBus | None = None,
        validator: PreMatchValidator | None = None,
    ) -> None:
        self._home = home
        self._away = away
        self._random_source = random_source
        self._rules = rules or get_rules_profile()
        self._rules.validate()
        self._event_bus = event_bus
        self._validator = validator or PreMatchValidator()
        self._performance = PerformanceAggregator()
        self._tracker = BaseOutTracker(outs_per_half=self._rules.outs_per_half)
        self._halves: list[HalfInningResult] = []
        self._home_score = 0
        self._away_score = 0
        self._phase = GamePhase.top(1)
        self._simulated = False

    @property
    def phase(self) -> GamePhase:
        return self._phase

    def simulate(self) -> MatchResult:
        if self._simulated:
            raise RuntimeError("a MatchSimulator plays exactly one match; create a new one")
        self._simulated = True
        self._validator.validate_match_input(self._home, self._away, self._random_source)

        label = f"{self._away.team_id}@{self._home.team_id}"
        logger.info("match %s starting under rules %s", label, self._rules.name)
        resolver = AtBatResolver(
            self._random_source,
            self._performance,
            event_bus=self._event_bus,
            match_label=label,
        )
        driver = HalfInningDriver(
            resolver,
            self._tracker,
            max_plate_appearances=self._rules.max_plate_appearances_per_half,
        )
        lineups = {
            HalfInning.TOP: BattingOrder(self._away),
            HalfInning.BOTTOM: BattingOrder(self._home),
        }
        home_pitcher = self._home.starting_pitcher
        away_pitcher = self._away.starting_pitcher

        while not self._phase.is_over:
            half = self._phase.half
            if half is HalfInning.TOP:
                result = driver.play(self._phase.inning, half, self._away, lineups[half], home_pitcher)
                self._away_score += result.runs
            else:
                result = driver.play(self._phase.inning, half, self._home, lineups[half], away_pitcher)
                self._home_score += result.runs
            self._halves.append(result)
            self._phase = advance_phase(
                self._phase,
                self._home_score,
                self._away_score,
                self._rules.regulation_innings,
            )

        match_result = ResultCompiler(self._rules).compile(self._home, self._away, self._halves, self._performance)
        logger.info(
            "match %s final %s %d - %d %s after %d innings (mvp: %s)",
            label,
            match_result.away_team,
            match_result.away_score,
            match_result.home_score,
            match_result.home_team,
            len(match_result.innings),
            match_result.mvp or "none",
        )
        return match_result


def simulate_match(
    home: TeamSnapshot,
    away: TeamSnapshot,
    random_source: RandomSource,
    *,
    rules: RulesProfile | None = None,
    event_bus: EventBus | None = None,
) -> MatchResult:
    return MatchSimulator(home, away, random_source, rules=rules, event_bus=event_bus).simulate()
