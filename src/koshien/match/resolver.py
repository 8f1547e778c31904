from __future__ import annotations

import logging
from typing import Any, Callable

from koshien.contracts import (
    AtBatOutcome,
    HalfInning,
    HitKind,
    OutKind,
    PlayEvent,
    RandomSource,
    RosterSnapshot,
)
from koshien.core import EngineIntegrityError, EventBus, build_forensic_artifact
from koshien.match.bases import BaseOutTracker
from koshien.match.models import AtBatResolution
from koshien.match.performance import PerformanceAggregator

logger = logging.getLogger(__name__)

HOME_RUN_FACTOR = 0.1
HIT_FACTOR = 0.3
WALK_FACTOR = 0.4

OUT_KINDS = (OutKind.STRIKEOUT, OutKind.GROUNDOUT, OutKind.FLYOUT)
_OUT_VERBS = {
    OutKind.STRIKEOUT: "strikes out",
    OutKind.GROUNDOUT: "grounds out",
    OutKind.FLYOUT: "flies out",
}


def hit_chance(batter: RosterSnapshot, pitcher: RosterSnapshot) -> float:
    pitching = pitcher.pitching if pitcher.pitching is not None else 100
    control = pitcher.control if pitcher.control is not None else 100
    return (
        batter.batting * 0.4
        + batter.power * 0.3
        + (100 - pitching) * 0.2
        + (100 - control) * 0.1
    ) / 100


def _runs_phrase(runs: int) -> str:
    return "1 run scores" if runs == 1 else f"{runs} runs score"


class AtBatResolver:
    """Resolves one plate appearance and applies its effect to the bases and box score.

    Outcome selection uses nested thresholds against a single uniform draw:
    home run below ``hit_chance * 0.1``, hit below ``hit_chance * 0.3``, walk
    below ``hit_chance * 0.4``, otherwise an out. Doubles versus singles and the
    kind of out take further draws from the same source.
    """

    def __init__(
        self,
        random_source: RandomSource,
        performance: PerformanceAggregator,
        *,
        event_bus: EventBus | None = None,
        match_label: str = "match",
    ) -> None:
        self._random_source = random_source
        self._performance = performance
        self._event_bus = event_bus
        self._match_label = match_label

    def resolve(
        self,
        batter: RosterSnapshot,
        pitcher: RosterSnapshot,
        tracker: BaseOutTracker,
        *,
        inning: int,
        half: HalfInning,
        batting_team_id: str,
    ) -> AtBatResolution:
        chance = hit_chance(batter, pitcher)
        context = {"inning": inning, "half": half.value, "batter_id": batter.player_id, "pitcher_id": pitcher.player_id}
        roll = self._draw("outcome", context, tracker)

        if roll < chance * HOME_RUN_FACTOR:
            resolution = self._home_run(batter, tracker, chance)
        elif roll < chance * HIT_FACTOR:
            resolution = self._hit(batter, tracker, chance, context)
        elif roll < chance * WALK_FACTOR:
            resolution = self._walk(batter, tracker, chance)
        else:
            resolution = self._out(batter, tracker, chance, context)

        self._performance.record(batter, batting_team_id, resolution.outcome)
        if self._event_bus is not None:
            self._event_bus.publish_play(
                PlayEvent(
                    inning=inning,
                    half=half,
                    batting_team_id=batting_team_id,
                    batter_id=batter.player_id,
                    batter_name=batter.name,
                    outcome=resolution.outcome,
                    runs_scored=resolution.runs_scored,
                    outs_after=tracker.outs,
                    bases_after=tracker.bases.as_tuple(),
                    description=resolution.description,
                )
            )
        return resolution

    def _home_run(self, batter: RosterSnapshot, tracker: BaseOutTracker, chance: float) -> AtBatResolution:
        runs = 1 + tracker.bases.occupied_count()
        tracker.bases.clear()
        return AtBatResolution(
            outcome=AtBatOutcome.HOME_RUN,
            runs_scored=runs,
            description=f"{batter.name} hits a home run! {_runs_phrase(runs)}.",
            hit_chance=chance,
        )

    def _hit(
        self,
        batter: RosterSnapshot,
        tracker: BaseOutTracker,
        chance: float,
        context: dict[str, Any],
    ) -> AtBatResolution:
        bases = tracker.bases
        if self._draw("hit_kind", context, tracker) < batter.power / 100:
            kind = HitKind.DOUBLE
            runs = int(bases.third) + int(bases.second)
            bases.third = bases.first
            bases.second = True
            bases.first = False
        else:
            kind = HitKind.SINGLE
            runs = int(bases.third)
            bases.third = bases.second
            bases.second = bases.first
            bases.first = True

        description = f"{batter.name} hits a {kind.value}!"
        if runs:
            description += f" {_runs_phrase(runs)}."
        return AtBatResolution(
            outcome=AtBatOutcome.HIT,
            runs_scored=runs,
            description=description,
            hit_chance=chance,
            hit_kind=kind,
        )

    def _walk(self, batter: RosterSnapshot, tracker: BaseOutTracker, chance: float) -> AtBatResolution:
        bases = tracker.bases
        runs = 0
        if bases.first:
            if bases.second:
                if bases.third:
                    runs = 1
                bases.third = True
            bases.second = True
        bases.first = True

        description = f"{batter.name} draws a walk."
        if runs:
            description += " A run is forced in."
        return AtBatResolution(
            outcome=AtBatOutcome.WALK,
            runs_scored=runs,
            description=description,
            hit_chance=chance,
        )

    def _out(
        self,
        batter: RosterSnapshot,
        tracker: BaseOutTracker,
        chance: float,
        context: dict[str, Any],
    ) -> AtBatResolution:
        tracker.record_out()
        kind = self._guarded("out_kind", context, tracker, lambda: self._random_source.choice(OUT_KINDS))
        if kind not in _OUT_VERBS:
            raise self._integrity_failure("RANDOM_SOURCE_INVALID", f"random source chose unknown out kind {kind!r}", context, tracker)
        return AtBatResolution(
            outcome=AtBatOutcome.OUT,
            runs_scored=0,
            description=f"{batter.name} {_OUT_VERBS[kind]}.",
            hit_chance=chance,
            out_kind=kind,
        )

    def _draw(self, purpose: str, context: dict[str, Any], tracker: BaseOutTracker) -> float:
        value = self._guarded(purpose, context, tracker, self._random_source.rand)
        if not isinstance(value, (int, float)) or not 0.0 <= value < 1.0:
            raise self._integrity_failure(
                "RANDOM_SOURCE_INVALID",
                f"random draw for {purpose} outside [0, 1): {value!r}",
                context,
                tracker,
            )
        return float(value)

    def _guarded(self, purpose: str, context: dict[str, Any], tracker: BaseOutTracker, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except Exception as exc:
            raise self._integrity_failure(
                "RANDOM_SOURCE_FAILURE",
                f"random source failed during {purpose}: {exc}",
                context,
                tracker,
            ) from exc

    def _integrity_failure(
        self,
        error_code: str,
        message: str,
        context: dict[str, Any],
        tracker: BaseOutTracker,
    ) -> EngineIntegrityError:
        logger.error("%s aborted: %s", self._match_label, message)
        artifact = build_forensic_artifact(
            engine_scope="at_bat",
            error_code=error_code,
            message=message,
            state_snapshot=tracker.snapshot(),
            context=dict(context),
            identifiers={"match": self._match_label, "batter_id": str(context.get("batter_id", ""))},
            causal_fragment=[f"draw:{error_code.lower()}"],
        )
        return EngineIntegrityError(artifact)
