# baller/report.py
from typing import Any, List, Sequence, Tuple

from .api.stats import Stat

TOP_N = 10
HEADERS = ("First Name", "Last Name", "Avg Points")

Row = Tuple[str, str, float]


def top_scorers(stats: Sequence[Stat], limit: int = TOP_N) -> List[Row]:
    """
    Highest average scorers first. sorted() is stable, so equal `pts`
    keep the order they were fetched in.
    """
    ordered = sorted(stats, key=lambda s: s.pts, reverse=True)
    return [(s.player.first_name, s.player.last_name, s.pts) for s in ordered[:limit]]


def _cell(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """
    Render rows as a boxed console table:

        +------------+-----------+
        | First Name | Last Name |
        +------------+-----------+
        | James      | Harden    |
        +------------+-----------+

    With no rows only the header block is drawn.
    """
    cells = [[_cell(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: Sequence[str]) -> str:
        return "|" + "|".join(f" {v.ljust(w)} " for v, w in zip(values, widths)) + "|"

    out = [border, line(headers), border]
    if cells:
        out.extend(line(row) for row in cells)
        out.append(border)
    return "\n".join(out)
