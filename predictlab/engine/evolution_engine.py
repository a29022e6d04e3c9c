from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

from predictlab.commons.logger import logger
from predictlab.commons.settings import load_settings
from predictlab.engine.comparator import compare_exams
from predictlab.engine.formatting import format_reference_range
from predictlab.engine.insights import generate_insight, generate_insights
from predictlab.engine.normalizer import classify_panels, group_by_panel, primary_panel
from predictlab.engine.timeseries import build_time_series, select_priority_series
from predictlab.engine.verdict import build_verdict
from predictlab.parsers.models import (
    ComparisonResult,
    ExamRecord,
    EvolutionVerdict,
    SeriesMap,
)


def _exam_summary(exam: Optional[ExamRecord]) -> Optional[Dict]:
    if exam is None:
        return None
    return {
        "id": exam.id,
        "exam_type": exam.exam_type,
        "created_at": exam.created_at.isoformat() if exam.created_at else None,
        "readings": len(exam.readings),
    }


class EvolutionEngine:
    """Engine facade that loads config and exposes the evolution operations.

    Acepta una ruta YAML, un dict ya cargado o nada (configuración por defecto).
    All methods are pure over the records they receive.
    """

    def __init__(self, config_path_or_obj: Any = None):
        self.settings = load_settings(config_path_or_obj)
        self.panels = self.settings.panels
        self.cfg = self.settings.engine

    # -------- panel classification --------
    def classify(self, name: str) -> List[str]:
        return classify_panels(name, self.panels)

    def primary_panel(self, name: str) -> Optional[str]:
        return primary_panel(name, self.panels)

    def panel_groups(self, names: Iterable[str]) -> Dict[str, List[str]]:
        return group_by_panel(names, self.panels)

    # -------- evolution --------
    def build_series(self, records: Iterable[ExamRecord]) -> SeriesMap:
        return build_time_series(records)

    def priority_series(self, series: SeriesMap):
        return select_priority_series(series, self.settings.priority_params)

    def compare(self, records: Iterable[ExamRecord]) -> ComparisonResult:
        return compare_exams(records, tolerance=self.cfg.same_tolerance)

    def insight(self, series: SeriesMap, parameter: str) -> Optional[str]:
        info = series.get(parameter)
        return generate_insight(info.points, parameter) if info else None

    def verdict(self, series: SeriesMap) -> Optional[EvolutionVerdict]:
        return build_verdict(series, self.cfg)

    def analyze(self, records: Iterable[ExamRecord]) -> Dict:
        """Full evolution report as a JSON-friendly dict for the rendering layer."""
        records = list(records)
        series = self.build_series(records)
        comparison = self.compare(records)
        verdict = self.verdict(series)
        patient_ids = sorted({r.patient_id for r in records if r.patient_id is not None})
        logger.debug(
            f"Análisis: {len(records)} examen(es), {len(series)} serie(s), modo {comparison.mode}"
        )
        return {
            "patient_id": patient_ids[0] if len(patient_ids) == 1 else None,
            "exam_count": len(records),
            "series": {
                key: {
                    "points": [asdict(p) for p in info.points],
                    "unit": info.unit,
                    "ref_min": info.ref_min,
                    "ref_max": info.ref_max,
                    "reference_range": format_reference_range(info.ref_min, info.ref_max),
                }
                for key, info in series.items()
            },
            "panels": self.panel_groups(series.keys()),
            "priority": [key for key, _ in self.priority_series(series)],
            "comparison": {
                "mode": comparison.mode,
                "latest_exam": _exam_summary(comparison.latest_exam),
                "previous_exam": _exam_summary(comparison.previous_exam),
                "rows": [asdict(r) for r in comparison.rows],
            },
            "insights": generate_insights(series),
            "verdict": (
                {"summary": verdict.summary, "insights": verdict.insights, "counts": verdict.counts}
                if verdict
                else None
            ),
        }
