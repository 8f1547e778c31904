from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import duckdb

from koshien.persistence import MART_TABLES

logger = logging.getLogger(__name__)

EXPORT_STEMS = {
    "mart_match_summaries": "match_summaries",
    "mart_line_scores": "line_scores",
    "mart_batting_lines": "batting_lines",
    "mart_highlights": "highlights",
}


class ExportService:
    def __init__(self, analytics_db: Path) -> None:
        self.analytics_db = analytics_db

    def export_required_datasets(self, output_dir: Path) -> list[Path]:
        if not self.analytics_db.exists():
            raise FileNotFoundError(f"box score database not found: {self.analytics_db}")
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        with duckdb.connect(str(self.analytics_db)) as conn:
            for table in MART_TABLES:
                outputs.extend(self._export_table(conn, table, output_dir / EXPORT_STEMS[table]))
        logger.info("exported %d files to %s", len(outputs), output_dir)
        return outputs

    def _export_table(self, conn: Any, table: str, stem: Path) -> list[Path]:
        csv_path = stem.with_suffix(".csv")
        parquet_path = stem.with_suffix(".parquet")
        conn.execute(f"COPY (SELECT * FROM {table}) TO '{csv_path.as_posix()}' (HEADER, DELIMITER ',')")
        conn.execute(f"COPY (SELECT * FROM {table}) TO '{parquet_path.as_posix()}' (FORMAT PARQUET)")
        return [csv_path, parquet_path]
