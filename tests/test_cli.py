from __future__ import annotations

from koshien import cli
from koshien.core import EngineIntegrityError, build_forensic_artifact


def _fingerprint(output: str) -> str:
    return next(line for line in output.splitlines() if line.startswith("Fingerprint: "))


def test_seeded_run_prints_line_score_and_is_reproducible(capsys):
    assert cli.main(["--seed", "7"]) == 0
    first = capsys.readouterr().out
    assert cli.main(["--seed", "7"]) == 0
    second = capsys.readouterr().out

    assert "Highlights:" in first
    assert "MVP:" in first
    assert "- Final: " in first
    assert _fingerprint(first) == _fingerprint(second)


def test_full_run_records_exports_and_charts(tmp_path, capsys):
    db = tmp_path / "box.duckdb"
    code = cli.main(
        [
            "--seed",
            "11",
            "--rules",
            "practice_seven",
            "--db",
            str(db),
            "--export",
            str(tmp_path / "exports"),
            "--chart",
            str(tmp_path / "runs.png"),
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "Recorded M_AWAY_AT_HOME_" in out
    assert (tmp_path / "exports" / "match_summaries.parquet").exists()
    assert (tmp_path / "runs.png").exists()


def test_export_without_db_is_usage_error(tmp_path, capsys):
    assert cli.main(["--export", str(tmp_path)]) == 2
    assert "--export requires --db" in capsys.readouterr().err


def test_integrity_failure_writes_forensics(tmp_path, monkeypatch, capsys):
    def explode(*args, **kwargs):
        artifact = build_forensic_artifact(
            engine_scope="at_bat",
            error_code="RANDOM_SOURCE_FAILURE",
            message="random source failed",
            state_snapshot={},
            context={},
            identifiers={},
            causal_fragment=[],
        )
        raise EngineIntegrityError(artifact)

    monkeypatch.setattr(cli, "simulate_match", explode)
    forensics = tmp_path / "forensics"

    assert cli.main(["--seed", "1", "--forensics-dir", str(forensics)]) == 1
    assert len(list(forensics.glob("forensic_*.json"))) == 1
    assert "Match aborted" in capsys.readouterr().err


def test_training_sessions_raise_printed_teamwork(capsys):
    assert cli.main(["--seed", "3"]) == 0
    untrained = capsys.readouterr().out.splitlines()[:2]
    assert cli.main(["--seed", "3", "--training-sessions", "2"]) == 0
    trained = capsys.readouterr().out.splitlines()[:2]

    assert untrained[0].startswith("Seishun High: offense ")
    assert untrained[1].startswith("Koei Academy: offense ")
    for before, after in zip(untrained, trained):
        assert int(after.split("teamwork ")[1].split()[0]) == int(before.split("teamwork ")[1].split()[0]) + 4


def test_negative_training_sessions_rejected(capsys):
    assert cli.main(["--training-sessions", "-1"]) == 2
    assert "--training-sessions" in capsys.readouterr().err
