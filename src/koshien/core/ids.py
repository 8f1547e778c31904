from __future__ import annotations

import re
from datetime import UTC, datetime
from uuid import uuid4

_SLUG = re.compile(r"[^A-Za-z0-9]+")


def now_utc() -> datetime:
    return datetime.now(UTC)


def make_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


def make_match_id(home_team_id: str, away_team_id: str) -> str:
    home = _SLUG.sub("", home_team_id).upper() or "HOME"
    away = _SLUG.sub("", away_team_id).upper() or "AWAY"
    return make_id(f"M_{away}_AT_{home}")
