import pytest
from pydantic import ValidationError

from predictlab.validation.validators import validate_exams_or_raise

# Registro tal como lo guarda exams_history
HISTORY_ROW = {
    "id": 7,
    "patient_id": "pet-42",
    "exam_type": "Hemograma",
    "created_at": "2024-03-01T10:00:00Z",
    "analysis_data": [
        {"parametro": "ERITRÓCITOS", "valor_encontrado": "5,8", "ref_min": "5,5", "ref_max": 8.5,
         "unidade": "milhões/µL", "status": "normal"},
        {"parametro": "HEMOGLOBINA", "valor_encontrado": 19.2, "ref_min": 12, "ref_max": 18,
         "unidade": "g/dL", "status": "Alto"},
        {"parametro": "PLAQUETAS", "valor_encontrado": 150000, "status": "baixo"},
    ],
}

ENGLISH_ROW = {
    "id": "e-1",
    "patientId": "pet-42",
    "examType": "Urinálise",
    "createdAt": None,
    "readings": [{"name": "Densidade", "value": "1,030", "refMin": "1,015", "refMax": "1,045", "status": ""}],
}


def test_history_row_aliases():
    [record] = validate_exams_or_raise([HISTORY_ROW])
    assert record.id == "7"
    assert record.patient_id == "pet-42"
    assert record.created_at.year == 2024 and record.created_at.tzinfo is not None
    names = [r.name for r in record.readings]
    assert names == ["ERITRÓCITOS", "HEMOGLOBINA", "PLAQUETAS"]
    assert record.readings[0].value == "5,8"
    assert record.readings[0].unit == "milhões/µL"
    assert [r.status for r in record.readings] == ["normal", "high", "low"]


def test_english_keys_and_empty_status():
    [record] = validate_exams_or_raise([ENGLISH_ROW])
    assert record.exam_type == "Urinálise"
    assert record.created_at is None
    reading = record.readings[0]
    assert reading.ref_min == "1,015" and reading.ref_max == "1,045"
    assert reading.status is None


def test_null_analysis_data_means_no_readings():
    [record] = validate_exams_or_raise([{"id": 1, "exam_type": None, "analysis_data": None}])
    assert record.readings == []
    assert record.exam_type == ""
    assert not record.analyzed


def test_unknown_status_raises():
    row = {"id": 1, "readings": [{"name": "UREIA", "value": 30, "status": "critical"}]}
    with pytest.raises(ValidationError):
        validate_exams_or_raise([row])


def test_missing_parameter_name_raises():
    with pytest.raises(ValidationError):
        validate_exams_or_raise([{"id": 1, "readings": [{"value": 30}]}])


def test_missing_id_raises():
    with pytest.raises(ValidationError):
        validate_exams_or_raise([{"readings": []}])
