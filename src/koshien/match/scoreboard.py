from __future__ import annotations

from koshien.contracts import MatchResult


def _team_hits(result: MatchResult, team_id: str) -> int:
    return sum(line.hits for line in result.batting_lines if line.team_id == team_id)


def render_line_score(result: MatchResult) -> str:
    name_width = max(len(result.away_team), len(result.home_team), 4)
    numbers = [str(i.inning) for i in result.innings]
    cell = max([2] + [len(n) for n in numbers])

    def row(label: str, cells: list[str], runs: str, hits: str) -> str:
        body = " ".join(c.rjust(cell) for c in cells)
        return f"{label.ljust(name_width)} | {body} | {runs.rjust(3)} {hits.rjust(3)}"

    lines = [
        row("", numbers, "R", "H"),
        row(result.away_team, [str(i.top_runs) for i in result.innings], str(result.away_score), str(_team_hits(result, result.away_team_id))),
        row(result.home_team, [str(i.bottom_runs) for i in result.innings], str(result.home_score), str(_team_hits(result, result.home_team_id))),
    ]
    divider = "-" * len(lines[0])
    lines.insert(1, divider)
    lines.append(divider)
    lines.append(f"MVP: {result.mvp or '-'}")
    return "\n".join(lines)
