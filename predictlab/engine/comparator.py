from typing import Dict, Iterable, Optional, Tuple

from predictlab.commons.logger import logger
from predictlab.parsers.base import comparison_key, parse_numeric, sort_chronological
from predictlab.parsers.models import (
    ComparisonResult,
    ComparisonRow,
    ExamRecord,
    Numeric,
    ParameterReading,
)

UNNAMED = "Unnamed parameter"
SINGLE_EXAM = "single exam"
NO_COMPARISON = "no comparison"
NO_CHANGE = "no change"


def _display_value(raw: Numeric) -> Numeric:
    num = parse_numeric(raw)
    return num if num is not None else raw


def _by_key(exam: ExamRecord) -> Dict[str, ParameterReading]:
    # si un examen repite el parámetro, gana la última lectura
    out: Dict[str, ParameterReading] = {}
    for reading in exam.readings:
        key = comparison_key(reading.name)
        if key:
            out[key] = reading
    return out


def describe_change(
    latest: Optional[float], previous: Optional[float], tolerance: float = 1e-6
) -> Tuple[str, str]:
    """Return ``(change_text, change_direction)`` for two numeric values."""
    if latest is None or previous is None:
        return NO_COMPARISON, "unknown"
    diff = latest - previous
    if abs(diff) < tolerance:
        return NO_CHANGE, "same"
    if diff > 0:
        return f"increased (+{diff:.2f})", "up"
    return f"decreased ({diff:.2f})", "down"


def _first(*values):
    return next((v for v in values if v is not None), None)


def _single_rows(exam: ExamRecord):
    return [
        ComparisonRow(
            parameter=(r.name or "").strip() or UNNAMED,
            latest_value=_display_value(r.value),
            previous_value=None,
            ref_min=r.ref_min,
            ref_max=r.ref_max,
            unit=r.unit,
            change_text=SINGLE_EXAM,
            change_direction="unknown",
        )
        for r in exam.readings
    ]


def compare_exams(exams: Iterable[ExamRecord], tolerance: float = 1e-6) -> ComparisonResult:
    """Diff the two most recent analyzed exams, one row per parameter in either.

    Exams without readings are ignored. Missing or non-numeric values give an
    ``unknown`` row instead of an error.
    """
    analyzed = sort_chronological((e for e in exams if e.analyzed), newest_first=True)

    if not analyzed:
        return ComparisonResult(mode="none")

    if len(analyzed) == 1:
        single = analyzed[0]
        logger.debug(f"Comparación en modo single (exam {single.id})")
        return ComparisonResult(
            mode="single", rows=_single_rows(single), single_exam=single, latest_exam=single
        )

    latest, previous = analyzed[0], analyzed[1]
    latest_map = _by_key(latest)
    previous_map = _by_key(previous)

    rows = []
    for key in sorted(set(latest_map) | set(previous_map)):
        x = latest_map.get(key)
        y = previous_map.get(key)
        x_value = x.value if x else None
        y_value = y.value if y else None
        change_text, direction = describe_change(
            parse_numeric(x_value), parse_numeric(y_value), tolerance
        )
        rows.append(
            ComparisonRow(
                parameter=(x or y).name.strip(),
                latest_value=_display_value(x_value),
                previous_value=_display_value(y_value),
                ref_min=_first(x and x.ref_min, y and y.ref_min),
                ref_max=_first(x and x.ref_max, y and y.ref_max),
                unit=_first(x and x.unit, y and y.unit),
                change_text=change_text,
                change_direction=direction,
            )
        )

    return ComparisonResult(
        mode="comparison", rows=rows, latest_exam=latest, previous_exam=previous
    )
