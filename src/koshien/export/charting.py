from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from pathlib import Path
from typing import Protocol

from koshien.contracts import MatchResult


class ChartAdapter(Protocol):
    def render_run_progression(self, result: MatchResult, path: Path) -> Path: ...


@dataclass(slots=True)
class MatplotlibChartAdapter:
    """Headless matplotlib renderer; swappable behind ChartAdapter contract."""

    width: float = 6.0
    height: float = 3.2
    dpi: int = 100

    def render_run_progression(self, result: MatchResult, path: Path) -> Path:
        from matplotlib.backends.backend_agg import FigureCanvasAgg
        from matplotlib.figure import Figure

        innings = [i.inning for i in result.innings]
        away = list(accumulate(i.top_runs for i in result.innings))
        home = list(accumulate(i.bottom_runs for i in result.innings))

        fig = Figure(figsize=(self.width, self.height), dpi=self.dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(111)
        ax.step(innings, away, where="post", marker="o", linewidth=1.8, label=result.away_team)
        ax.step(innings, home, where="post", marker="s", linewidth=1.8, label=result.home_team)
        ax.set_title(f"{result.away_team} {result.away_score} - {result.home_score} {result.home_team}")
        ax.set_xlabel("Inning")
        ax.set_ylabel("Runs")
        ax.set_xticks(innings)
        ax.grid(alpha=0.3)
        ax.legend(loc="upper left")
        fig.tight_layout()

        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path)
        return path
