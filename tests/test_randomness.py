from __future__ import annotations

import pytest

from koshien.core import (
    EngineIntegrityError,
    PythonRandomSource,
    RecordingRandomSource,
    ReplayRandomSource,
    seeded_random,
)
from koshien.match import result_fingerprint, simulate_match
from tests.helpers import make_team


def test_spawned_streams_are_deterministic_and_independent():
    a = seeded_random(1).spawn("match")
    b = seeded_random(1).spawn("match")
    c = seeded_random(1).spawn("roster:HOME")

    draws_a = [a.rand() for _ in range(5)]
    assert draws_a == [b.rand() for _ in range(5)]
    assert draws_a != [c.rand() for _ in range(5)]


def test_choice_rejects_empty_sequence():
    with pytest.raises(ValueError):
        PythonRandomSource(seed=1).choice([])


def test_recorded_match_replays_to_same_result():
    home, away = make_team("H"), make_team("A")
    recorder = RecordingRandomSource(PythonRandomSource(seed=31))
    recorded = simulate_match(home, away, recorder)

    replay = ReplayRandomSource(recorder.draws)
    replayed = simulate_match(home, away, replay)

    assert result_fingerprint(replayed) == result_fingerprint(recorded)
    assert replay.remaining == 0
    assert {kind for kind, _ in recorder.draws} == {"rand", "choice"}


def test_replay_rejects_kind_mismatch():
    replay = ReplayRandomSource([("choice", 0)])
    with pytest.raises(ValueError):
        replay.rand()


def test_replay_bounds_randint():
    replay = ReplayRandomSource([("randint", 7)])
    with pytest.raises(ValueError):
        replay.randint(1, 3)


def test_exhausted_replay_aborts_match():
    home, away = make_team("H"), make_team("A")
    with pytest.raises(EngineIntegrityError) as exc_info:
        simulate_match(home, away, ReplayRandomSource([]))
    assert exc_info.value.artifact.error_code == "RANDOM_SOURCE_FAILURE"
