from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from koshien.contracts import ValidationError
from koshien.core import (
    EngineIntegrityError,
    PythonRandomSource,
    default_rules_profiles,
    get_rules_profile,
    make_match_id,
    persist_forensic_artifact,
)
from koshien.export import ExportService, MatplotlibChartAdapter
from koshien.match import render_line_score, result_fingerprint, simulate_match
from koshien.org import Team, build_demo_team, take_snapshot
from koshien.persistence import BoxScoreStore

logger = logging.getLogger(__name__)


def _rating_line(team: Team) -> str:
    r = team.rating
    return (
        f"{team.name}: offense {r.offense} defense {r.defense} pitching {r.pitching} "
        f"teamwork {r.teamwork} morale {r.morale}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="koshien", description="Koshien Sim: simulate one high-school baseball match")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic dev/testing runs")
    parser.add_argument("--rules", default="koshien_standard", choices=sorted(default_rules_profiles()), help="rules profile")
    parser.add_argument("--home", default="Seishun High", help="home team name")
    parser.add_argument("--away", default="Koei Academy", help="away team name")
    parser.add_argument("--training-sessions", type=int, default=0, help="team training sessions each side runs before the match")
    parser.add_argument("--db", type=Path, default=None, help="record the box score in this DuckDB file")
    parser.add_argument("--export", type=Path, default=None, help="export box score marts to this directory (needs --db)")
    parser.add_argument("--chart", type=Path, default=None, help="write a run-progression PNG here")
    parser.add_argument("--forensics-dir", type=Path, default=Path("forensics"), help="where integrity failures are written")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.export is not None and args.db is None:
        print("--export requires --db", file=sys.stderr)
        return 2

    if args.training_sessions < 0:
        print("--training-sessions must not be negative", file=sys.stderr)
        return 2

    random_source = PythonRandomSource(seed=args.seed)
    teams = [build_demo_team("HOME", args.home, random_source), build_demo_team("AWAY", args.away, random_source)]
    for team in teams:
        training_rng = random_source.spawn(f"training:{team.team_id}")
        for _ in range(args.training_sessions):
            team.conduct_team_training(training_rng)
        print(_rating_line(team))
    home, away = (take_snapshot(team) for team in teams)

    try:
        result = simulate_match(home, away, random_source.spawn("match"), rules=get_rules_profile(args.rules))
    except ValidationError as exc:
        print("Match rejected by pre-match validation:", file=sys.stderr)
        for issue in exc.issues:
            print(f"- {issue.code} [{issue.entity_id}] {issue.message}", file=sys.stderr)
        return 1
    except EngineIntegrityError as exc:
        path = persist_forensic_artifact(exc.artifact, args.forensics_dir)
        print(f"Match aborted: {exc} (forensics: {path})", file=sys.stderr)
        return 1

    print(render_line_score(result))
    print("Highlights:")
    for highlight in result.highlights:
        print(f"- {highlight}")
    print(f"Fingerprint: {result_fingerprint(result)}")

    if args.db is not None:
        store = BoxScoreStore(args.db)
        match_id = make_match_id(home.team_id, away.team_id)
        store.record_match(match_id, result)
        print(f"Recorded {match_id} in {args.db}")
        if args.export is not None:
            outputs = ExportService(args.db).export_required_datasets(args.export)
            print("Exported datasets:")
            for p in outputs:
                print(f"- {p}")

    if args.chart is not None:
        chart = MatplotlibChartAdapter().render_run_progression(result, args.chart)
        print(f"Chart written to {chart}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
