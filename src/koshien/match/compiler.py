from __future__ import annotations

import hashlib
import json

from koshien.contracts import (
    AtBatOutcome,
    HalfInning,
    InningResult,
    MatchResult,
    PlayerPerformance,
    RulesProfile,
    TeamSnapshot,
)
from koshien.match.models import HalfInningResult
from koshien.match.performance import PerformanceAggregator


def _half_label(half: HalfInningResult) -> str:
    prefix = "Top" if half.half is HalfInning.TOP else "Bottom"
    return f"{prefix} {half.inning}"


class ResultCompiler:
    def __init__(self, rules: RulesProfile) -> None:
        self._rules = rules

    def mvp_score(self, line: PlayerPerformance) -> int:
        return (
            line.hits * self._rules.mvp_hit_points
            + line.home_runs * self._rules.mvp_home_run_points
            + line.walks * self._rules.mvp_walk_points
        )

    def select_mvp(self, performance: PerformanceAggregator) -> PlayerPerformance | None:
        # Strictly greater keeps the earliest-inserted player on ties.
        best: PlayerPerformance | None = None
        best_score = 0
        for line in performance:
            score = self.mvp_score(line)
            if score > best_score:
                best = line
                best_score = score
        return best

    def compile(
        self,
        home: TeamSnapshot,
        away: TeamSnapshot,
        halves: list[HalfInningResult],
        performance: PerformanceAggregator,
    ) -> MatchResult:
        innings = self.innings(halves)
        home_score = sum(i.bottom_runs for i in innings)
        away_score = sum(i.top_runs for i in innings)
        mvp = self.select_mvp(performance)
        return MatchResult(
            home_team=home.name,
            away_team=away.name,
            home_score=home_score,
            away_score=away_score,
            innings=innings,
            mvp=mvp.name if mvp else "",
            highlights=self.highlights(home, away, halves, home_score, away_score),
            mvp_player_id=mvp.player_id if mvp else "",
            batting_lines=performance.batting_lines(),
            home_team_id=home.team_id,
            away_team_id=away.team_id,
        )

    def innings(self, halves: list[HalfInningResult]) -> tuple[InningResult, ...]:
        by_inning: dict[int, dict[HalfInning, HalfInningResult]] = {}
        for half in halves:
            by_inning.setdefault(half.inning, {})[half.half] = half

        results: list[InningResult] = []
        for number in sorted(by_inning):
            pair = by_inning[number]
            top = pair.get(HalfInning.TOP)
            bottom = pair.get(HalfInning.BOTTOM)
            events: list[str] = []
            if top is not None:
                events.extend(top.events)
            if bottom is not None:
                events.extend(bottom.events)
            results.append(
                InningResult(
                    inning=number,
                    top_runs=top.runs if top else 0,
                    bottom_runs=bottom.runs if bottom else 0,
                    events=tuple(events),
                )
            )
        return tuple(results)

    def highlights(
        self,
        home: TeamSnapshot,
        away: TeamSnapshot,
        halves: list[HalfInningResult],
        home_score: int,
        away_score: int,
    ) -> tuple[str, ...]:
        notes: list[str] = []
        for half in halves:
            for resolution in half.resolutions:
                if resolution.outcome is AtBatOutcome.HOME_RUN or resolution.runs_scored > 0:
                    notes.append(f"{_half_label(half)}: {resolution.description}")

        last_inning = max((h.inning for h in halves), default=0)
        if last_inning > self._rules.regulation_innings:
            notes.append(f"Extra innings: decided in inning {last_inning}.")

        if home_score > away_score:
            notes.append(f"Final: {home.name} defeat {away.name} {home_score}-{away_score}.")
        elif away_score > home_score:
            notes.append(f"Final: {away.name} defeat {home.name} {away_score}-{home_score}.")
        else:
            notes.append(f"Final: {away.name} and {home.name} tie {away_score}-{home_score}.")
        return tuple(notes)


def result_fingerprint(result: MatchResult) -> str:
    canonical = json.dumps(result.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
