from .duckdb_store import MART_TABLES, BoxScoreStore

__all__ = ["MART_TABLES", "BoxScoreStore"]
