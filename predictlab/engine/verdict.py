"""
Evolution verdict across every trending parameter of one patient.

Each series with at least two points is scored on its last two points as
improving, worsening or stable; the counts pick one of four summaries.
"""

from typing import Optional

from predictlab.commons.types import EngineCfg
from predictlab.engine.formatting import format_number
from predictlab.engine.insights import percent_change
from predictlab.parsers.models import EvolutionVerdict, SeriesMap

POSITIVE = "Overall positive trend: indicators show favourable evolution since the last exam."
CAUTION = "Attention: some parameters are worsening. Closer follow-up is recommended."
MIXED = "Mixed evolution: some indicators improve while others require attention."
STABLE = "Indicators stable between the last exams."


def build_verdict(series: SeriesMap, cfg: Optional[EngineCfg] = None) -> Optional[EvolutionVerdict]:
    """
    Returns ``None`` when no series has two points to compare (empty map or
    single exam); callers show a neutral "no analysis yet" state.
    """
    cfg = cfg or EngineCfg()
    insights = []
    improving = worsening = stable = 0
    compared = 0

    for param, info in series.items():
        if len(info.points) < 2:
            continue
        compared += 1
        prev, last = info.points[-2], info.points[-1]
        diff = last.value - prev.value
        pct = abs(percent_change(prev.value, last.value))
        last_normal = last.status == "normal"
        prev_normal = prev.status == "normal"
        change = f"({format_number(prev.value)} → {format_number(last.value)})"

        if last_normal and not prev_normal:
            improving += 1
            insights.append(f"{param} returned to reference range {change}")
        elif not last_normal and prev_normal:
            worsening += 1
            insights.append(f"{param} left reference range {change}")
        elif pct > cfg.worsening_pct_threshold and not last_normal:
            worsening += 1
            insights.append(f"{param} changed {pct:.1f}% and remains outside the reference range")
        elif abs(diff) < cfg.stable_abs_diff:
            stable += 1
        elif last_normal:
            improving += 1
        else:
            stable += 1

    if compared == 0:
        return None

    if improving > 0 and worsening == 0:
        summary = POSITIVE
    elif worsening > improving:
        summary = CAUTION
    elif improving > 0 and worsening > 0:
        summary = MIXED
    else:
        summary = STABLE

    return EvolutionVerdict(
        summary=summary,
        insights=insights,
        counts={"improving": improving, "worsening": worsening, "stable": stable},
    )
