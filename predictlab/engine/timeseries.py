from typing import Iterable, List, Sequence, Tuple

from predictlab.commons.logger import logger
from predictlab.parsers.base import parse_numeric, series_key, sort_chronological
from predictlab.parsers.models import (
    ExamRecord,
    ParameterSeries,
    SeriesMap,
    TimeSeriesPoint,
)


def _point_date(record: ExamRecord):
    return record.created_at.isoformat() if record.created_at is not None else None


def build_time_series(records: Iterable[ExamRecord]) -> SeriesMap:
    """Fold exam records into one series per exact parameter name.

    Records are ordered here (oldest first, ``id`` as tie-break); callers do
    not need to pre-sort. Unit and reference range come from the first
    reading seen for each key. Readings whose value is not numeric add no
    point.
    """
    series: SeriesMap = {}
    for record in sort_chronological(records):
        date = _point_date(record)
        for reading in record.readings:
            key = series_key(reading.name)
            if not key:
                continue
            value = parse_numeric(reading.value)
            if value is None:
                logger.debug(f"Lectura no numérica omitida: {key}={reading.value!r} (exam {record.id})")
                continue
            if key not in series:
                series[key] = ParameterSeries(
                    unit=reading.unit,
                    ref_min=parse_numeric(reading.ref_min),
                    ref_max=parse_numeric(reading.ref_max),
                )
            series[key].points.append(
                TimeSeriesPoint(date=date, value=value, status=reading.status or "normal")
            )
    return series


def select_priority_series(
    series: SeriesMap, priority: Sequence[str]
) -> List[Tuple[str, ParameterSeries]]:
    """Pick, for each priority name in order, the first series whose key contains it.

    Used by the discharge evolution table; containment is case-sensitive.
    """
    out: List[Tuple[str, ParameterSeries]] = []
    for wanted in priority:
        if not wanted:
            continue
        hit = next((key for key in series if wanted in key), None)
        if hit is not None:
            out.append((hit, series[hit]))
    return out
