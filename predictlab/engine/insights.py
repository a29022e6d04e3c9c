from typing import Dict, List, Optional

from predictlab.engine.formatting import format_number
from predictlab.parsers.models import SeriesMap, TimeSeriesPoint

RETURNED = "returned to reference range"
LEFT = "left the reference range, monitor"
STILL_OUT = "still outside the reference range"
WITHIN = "within normal range"


def percent_change(prev: float, last: float) -> float:
    # prev == 0 no tiene variación relativa definida
    if prev == 0:
        return 0.0
    return (last - prev) / prev * 100


def _context(prev: TimeSeriesPoint, last: TimeSeriesPoint) -> str:
    last_normal = last.status == "normal"
    prev_normal = prev.status == "normal"
    if last_normal and not prev_normal:
        return RETURNED
    if not last_normal and prev_normal:
        return LEFT
    if not last_normal:
        return STILL_OUT
    return WITHIN


def generate_insight(points: List[TimeSeriesPoint], parameter: str) -> Optional[str]:
    """One sentence on the change between the last two points, or ``None`` with fewer than two."""
    if len(points) < 2:
        return None
    prev, last = points[-2], points[-1]
    diff = last.value - prev.value
    if diff == 0:
        return f"{parameter} remained stable at {format_number(last.value)} between the last two exams."

    direction = "rose" if diff > 0 else "fell"
    pct = abs(round(percent_change(prev.value, last.value), 1))
    return (
        f"{parameter} {direction} {format_number(pct)}% "
        f"(from {format_number(prev.value)} to {format_number(last.value)}), {_context(prev, last)}."
    )


def generate_insights(series: SeriesMap) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, info in series.items():
        sentence = generate_insight(info.points, key)
        if sentence is not None:
            out[key] = sentence
    return out
