from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import duckdb

from koshien.contracts import MatchResult
from koshien.core import now_utc
from koshien.match import result_fingerprint

logger = logging.getLogger(__name__)

MART_TABLES = (
    "mart_match_summaries",
    "mart_line_scores",
    "mart_batting_lines",
    "mart_highlights",
)


class BoxScoreStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> Any:
        return duckdb.connect(str(self.db_path))

    def initialize_schema(self) -> None:
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS mart_match_summaries (
                    match_id VARCHAR PRIMARY KEY,
                    recorded_at VARCHAR,
                    home_team_id VARCHAR,
                    away_team_id VARCHAR,
                    home_team VARCHAR,
                    away_team VARCHAR,
                    home_score INTEGER,
                    away_score INTEGER,
                    innings INTEGER,
                    mvp VARCHAR,
                    mvp_player_id VARCHAR,
                    fingerprint VARCHAR
                );

                CREATE TABLE IF NOT EXISTS mart_line_scores (
                    match_id VARCHAR,
                    inning INTEGER,
                    top_runs INTEGER,
                    bottom_runs INTEGER,
                    PRIMARY KEY(match_id, inning)
                );

                CREATE TABLE IF NOT EXISTS mart_batting_lines (
                    match_id VARCHAR,
                    player_id VARCHAR,
                    team_id VARCHAR,
                    name VARCHAR,
                    at_bats INTEGER,
                    hits INTEGER,
                    home_runs INTEGER,
                    walks INTEGER,
                    PRIMARY KEY(match_id, player_id)
                );

                CREATE TABLE IF NOT EXISTS mart_highlights (
                    match_id VARCHAR,
                    seq INTEGER,
                    highlight VARCHAR,
                    PRIMARY KEY(match_id, seq)
                );
                """
            )

    def record_match(self, match_id: str, result: MatchResult) -> None:
        self.initialize_schema()
        summary = (
            match_id,
            now_utc().isoformat(),
            result.home_team_id,
            result.away_team_id,
            result.home_team,
            result.away_team,
            result.home_score,
            result.away_score,
            len(result.innings),
            result.mvp,
            result.mvp_player_id,
            result_fingerprint(result),
        )
        line_rows = [(match_id, i.inning, i.top_runs, i.bottom_runs) for i in result.innings]
        batting_rows = [
            (match_id, b.player_id, b.team_id, b.name, b.at_bats, b.hits, b.home_runs, b.walks)
            for b in result.batting_lines
        ]
        highlight_rows = [(match_id, seq, text) for seq, text in enumerate(result.highlights, start=1)]

        with self.connect() as conn:
            for table in MART_TABLES:
                conn.execute(f"DELETE FROM {table} WHERE match_id = ?", [match_id])
            conn.execute("INSERT INTO mart_match_summaries VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)", list(summary))
            self._insert_rows(conn, "mart_line_scores", line_rows)
            self._insert_rows(conn, "mart_batting_lines", batting_rows)
            self._insert_rows(conn, "mart_highlights", highlight_rows)
        logger.info("recorded match %s (%s %d - %d %s)", match_id, result.away_team, result.away_score, result.home_score, result.home_team)

    def get_match_summary(self, match_id: str) -> dict[str, Any] | None:
        self.initialize_schema()
        with self.connect() as conn:
            cursor = conn.execute("SELECT * FROM mart_match_summaries WHERE match_id = ?", [match_id])
            row = cursor.fetchone()
            if row is None:
                return None
            columns = [d[0] for d in cursor.description]
        return dict(zip(columns, row))

    def get_line_score(self, match_id: str) -> list[tuple[int, int, int]]:
        self.initialize_schema()
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT inning, top_runs, bottom_runs FROM mart_line_scores WHERE match_id = ? ORDER BY inning",
                [match_id],
            ).fetchall()
        return [(int(r[0]), int(r[1]), int(r[2])) for r in rows]

    def player_totals(self) -> list[dict[str, Any]]:
        self.initialize_schema()
        with self.connect() as conn:
            rows = conn.execute(
                """
                SELECT player_id, any_value(name), any_value(team_id), COUNT(*) AS games,
                       SUM(at_bats), SUM(hits), SUM(home_runs), SUM(walks)
                FROM mart_batting_lines
                GROUP BY player_id
                ORDER BY SUM(hits) DESC, SUM(home_runs) DESC, player_id
                """
            ).fetchall()
        keys = ("player_id", "name", "team_id", "games", "at_bats", "hits", "home_runs", "walks")
        return [
            {k: (int(v) if k not in ("player_id", "name", "team_id") else v) for k, v in zip(keys, row)}
            for row in rows
        ]

    def _insert_rows(self, conn: Any, table: str, rows: list[tuple]) -> None:
        if not rows:
            return
        values_placeholder = ",".join(["?"] * len(rows[0]))
        conn.executemany(f"INSERT INTO {table} VALUES ({values_placeholder})", [list(r) for r in rows])
