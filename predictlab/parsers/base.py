import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from .models import ExamRecord, Numeric

STATUS_SYNONYMS = {
    "normal": "normal",
    "high": "high",
    "alto": "high",
    "low": "low",
    "baixo": "low",
}


def parse_numeric(raw: Numeric) -> Optional[float]:
    """Best-effort float for a reading value; ``None`` when it is not a finite number.

    Acepta números nativos o strings con ',' o '.' como separador decimal.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        num = float(raw)
        return num if math.isfinite(num) else None
    if not isinstance(raw, str):
        return None
    val = raw.strip().replace(",", ".", 1)
    if val == "":
        return None
    try:
        num = float(val)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def normalize_status(raw: Optional[str]) -> Optional[str]:
    """Map a status tag (including the pt-BR ``alto``/``baixo``) to normal/high/low.

    Returns ``None`` for empty input and raises ``ValueError`` for unknown tags.
    """
    if raw is None:
        return None
    tag = raw.strip().lower()
    if not tag:
        return None
    if tag not in STATUS_SYNONYMS:
        raise ValueError(f"Status desconocido: {raw!r}")
    return STATUS_SYNONYMS[tag]


def series_key(name: Optional[str]) -> str:
    # agrupación exacta: solo se recortan espacios
    return (name or "").strip()


def comparison_key(name: Optional[str]) -> str:
    return (name or "").strip().upper()


def timestamp_of(created_at: Optional[datetime]) -> float:
    """Epoch seconds; a missing timestamp counts as epoch 0. Naive datetimes are UTC."""
    if created_at is None:
        return 0.0
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.timestamp()


def _order_key(record: ExamRecord) -> Tuple[float, str]:
    return (timestamp_of(record.created_at), str(record.id))


def sort_chronological(records: Iterable[ExamRecord], newest_first: bool = False) -> List[ExamRecord]:
    """Sort by ``created_at`` with ``id`` as tie-break, so equal/missing timestamps stay deterministic."""
    return sorted(records, key=_order_key, reverse=newest_first)
