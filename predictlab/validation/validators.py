# predictlab/validation/validators.py
from datetime import datetime
from typing import Any, Iterable, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from predictlab.parsers.base import normalize_status
from predictlab.parsers.models import ExamRecord, ParameterReading

RawNumber = Optional[Union[int, float, str]]


class ReadingPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(validation_alias=AliasChoices("name", "parametro", "parameter"))
    value: RawNumber = Field(
        None, validation_alias=AliasChoices("value", "valor_encontrado", "valor")
    )
    ref_min: RawNumber = Field(None, validation_alias=AliasChoices("ref_min", "refMin"))
    ref_max: RawNumber = Field(None, validation_alias=AliasChoices("ref_max", "refMax"))
    unit: Optional[str] = Field(None, validation_alias=AliasChoices("unit", "unidade"))
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def _known_status(cls, v: Optional[str]):
        return normalize_status(v)

    def to_reading(self) -> ParameterReading:
        return ParameterReading(
            name=self.name,
            value=self.value,
            ref_min=self.ref_min,
            ref_max=self.ref_max,
            unit=self.unit,
            status=self.status,
        )


class ExamPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    patient_id: Optional[Union[int, str]] = Field(
        None, validation_alias=AliasChoices("patient_id", "patientId")
    )
    exam_type: str = Field("", validation_alias=AliasChoices("exam_type", "examType"))
    created_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    readings: List[ReadingPayload] = Field(
        default_factory=list, validation_alias=AliasChoices("readings", "analysis_data")
    )

    @field_validator("readings", mode="before")
    @classmethod
    def _null_readings(cls, v: Any):
        # el histórico guarda analysis_data = null cuando el examen no fue analizado
        return [] if v is None else v

    @field_validator("exam_type", mode="before")
    @classmethod
    def _null_exam_type(cls, v: Any):
        return "" if v is None else v

    def to_record(self) -> ExamRecord:
        return ExamRecord(
            id=str(self.id),
            patient_id=str(self.patient_id) if self.patient_id is not None else None,
            exam_type=self.exam_type,
            created_at=self.created_at,
            readings=[r.to_reading() for r in self.readings],
        )


def validate_exams_or_raise(payload: Iterable[dict]) -> List[ExamRecord]:
    """Construye los ExamRecord y levanta ValidationError si algo falta/está mal."""
    return [ExamPayload.model_validate(item).to_record() for item in payload]
