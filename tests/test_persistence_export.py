from __future__ import annotations

import duckdb
import pytest

from koshien.core import PythonRandomSource
from koshien.export import ExportService, MatplotlibChartAdapter
from koshien.match import result_fingerprint, simulate_match
from koshien.persistence import BoxScoreStore
from tests.helpers import ScriptedRandomSource, all_outs, make_team


def _result(seed: int):
    return simulate_match(make_team("H", "Home High"), make_team("A", "Away Academy"), PythonRandomSource(seed=seed))


def test_record_and_read_back_match(tmp_path):
    store = BoxScoreStore(tmp_path / "box.duckdb")
    result = _result(3)

    store.record_match("M1", result)
    summary = store.get_match_summary("M1")

    assert summary["home_score"] == result.home_score
    assert summary["away_score"] == result.away_score
    assert summary["innings"] == len(result.innings)
    assert summary["mvp"] == result.mvp
    assert summary["fingerprint"] == result_fingerprint(result)
    assert store.get_line_score("M1") == [(i.inning, i.top_runs, i.bottom_runs) for i in result.innings]
    assert store.get_match_summary("missing") is None


def test_rerecording_a_match_replaces_rows(tmp_path):
    store = BoxScoreStore(tmp_path / "box.duckdb")
    result = _result(4)
    store.record_match("M1", result)
    store.record_match("M1", result)

    with store.connect() as conn:
        lines = conn.execute("SELECT COUNT(*) FROM mart_line_scores WHERE match_id = 'M1'").fetchone()[0]
        highlights = conn.execute("SELECT COUNT(*) FROM mart_highlights WHERE match_id = 'M1'").fetchone()[0]
    assert lines == len(result.innings)
    assert highlights == len(result.highlights)


def test_player_totals_aggregate_across_matches(tmp_path):
    store = BoxScoreStore(tmp_path / "box.duckdb")
    scripted = all_outs() + [0.01] + all_outs()
    home, away = make_team("H"), make_team("A")
    store.record_match("M1", simulate_match(home, away, ScriptedRandomSource(scripted)))
    store.record_match("M2", simulate_match(home, away, ScriptedRandomSource(scripted)))

    totals = {row["player_id"]: row for row in store.player_totals()}

    assert totals["H1"]["games"] == 2
    assert totals["H1"]["home_runs"] == 2
    assert totals["A1"]["hits"] == 0
    assert store.player_totals()[0]["team_id"] == "H"


def test_export_writes_csv_and_parquet(tmp_path):
    db = tmp_path / "box.duckdb"
    result = _result(5)
    BoxScoreStore(db).record_match("M1", result)

    outputs = ExportService(db).export_required_datasets(tmp_path / "exports")

    assert sorted(p.name for p in outputs) == sorted(
        f"{stem}.{ext}"
        for stem in ("match_summaries", "line_scores", "batting_lines", "highlights")
        for ext in ("csv", "parquet")
    )
    assert all(p.exists() for p in outputs)
    header = (tmp_path / "exports" / "line_scores.csv").read_text(encoding="utf-8").splitlines()[0]
    assert header == "match_id,inning,top_runs,bottom_runs"

    parquet = (tmp_path / "exports" / "line_scores.parquet").as_posix()
    with duckdb.connect() as conn:
        count = conn.execute(f"SELECT COUNT(*) FROM read_parquet('{parquet}')").fetchone()[0]
    assert count == len(result.innings)


def test_export_requires_existing_database(tmp_path):
    with pytest.raises(FileNotFoundError):
        ExportService(tmp_path / "nope.duckdb").export_required_datasets(tmp_path / "exports")


def test_chart_adapter_writes_png(tmp_path):
    path = MatplotlibChartAdapter().render_run_progression(_result(6), tmp_path / "charts" / "runs.png")
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
