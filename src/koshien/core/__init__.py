from .errors import EngineIntegrityError, build_forensic_artifact, persist_forensic_artifact
from .events import EventBus
from .ids import make_id, make_match_id, now_utc
from .randomness import (
    PythonRandomSource,
    RecordingRandomSource,
    ReplayRandomSource,
    seeded_random,
)
from .rules import STANDARD_PROFILE_NAME, default_rules_profiles, get_rules_profile

__all__ = [
    "STANDARD_PROFILE_NAME",
    "EngineIntegrityError",
    "EventBus",
    "PythonRandomSource",
    "RecordingRandomSource",
    "ReplayRandomSource",
    "build_forensic_artifact",
    "default_rules_profiles",
    "get_rules_profile",
    "make_id",
    "make_match_id",
    "now_utc",
    "persist_forensic_artifact",
    "seeded_random",
]
