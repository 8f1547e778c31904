from .bases import BaseOutTracker
from .compiler import ResultCompiler, result_fingerprint
from .game import MatchSimulator, advance_phase, simulate_match
from .inning import BattingOrder, HalfInningDriver
from .models import AtBatResolution, HalfInningResult
from .performance import PerformanceAggregator
from .resolver import AtBatResolver, hit_chance
from .scoreboard import render_line_score
from .validation import PreMatchValidator, REQUIRED_POSITIONS

__all__ = [
    "REQUIRED_POSITIONS",
    "AtBatResolution",
    "AtBatResolver",
    "BaseOutTracker",
    "BattingOrder",
    "HalfInningDriver",
    "HalfInningResult",
    "MatchSimulator",
    "PerformanceAggregator",
    "PreMatchValidator",
    "ResultCompiler",
    "advance_phase",
    "hit_chance",
    "render_line_score",
    "result_fingerprint",
    "simulate_match",
]
