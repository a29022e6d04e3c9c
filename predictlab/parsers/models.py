# ===============================
# File: predictlab/parsers/models.py
# ===============================
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

Numeric = Union[int, float, str, None]


@dataclass(frozen=True)
class ParameterReading:
    name: str
    value: Numeric = None
    ref_min: Numeric = None
    ref_max: Numeric = None
    unit: Optional[str] = None
    status: Optional[str] = None  # normal | high | low


@dataclass(frozen=True)
class ExamRecord:
    id: str
    patient_id: Optional[str] = None
    exam_type: str = ""
    created_at: Optional[datetime] = None
    readings: List[ParameterReading] = field(default_factory=list)

    @property
    def analyzed(self) -> bool:
        return len(self.readings) > 0


@dataclass
class TimeSeriesPoint:
    date: Optional[str]
    value: float
    status: str


@dataclass
class ParameterSeries:
    points: List[TimeSeriesPoint] = field(default_factory=list)
    unit: Optional[str] = None
    ref_min: Optional[float] = None
    ref_max: Optional[float] = None


@dataclass
class ComparisonRow:
    parameter: str
    latest_value: Numeric
    previous_value: Numeric
    ref_min: Numeric
    ref_max: Numeric
    unit: Optional[str]
    change_text: str
    change_direction: str  # up | down | same | unknown


@dataclass
class ComparisonResult:
    mode: str  # none | single | comparison
    rows: List[ComparisonRow] = field(default_factory=list)
    single_exam: Optional[ExamRecord] = None
    latest_exam: Optional[ExamRecord] = None
    previous_exam: Optional[ExamRecord] = None


@dataclass
class EvolutionVerdict:
    summary: str
    insights: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)


SeriesMap = Dict[str, ParameterSeries]
