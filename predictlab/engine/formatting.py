from decimal import Decimal
from typing import Optional

from predictlab.parsers.models import Numeric

PLACEHOLDER = "—"


def format_number(value: float) -> str:
    """Plain decimal text: ``2.0`` -> ``"2"``, ``1e-05`` -> ``"0.00001"``, never exponent notation."""
    text = format(Decimal(repr(value)), "f")
    return text[:-2] if text.endswith(".0") else text


def format_cell_value(value: Numeric, unit: Optional[str] = None) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    if isinstance(value, float):
        value = format_number(value)
    if unit and unit.strip():
        return f"{value} {unit}"
    return str(value)


def format_reference_range(ref_min: Numeric, ref_max: Numeric) -> str:
    low = PLACEHOLDER if ref_min is None else ref_min
    high = PLACEHOLDER if ref_max is None else ref_max
    if isinstance(low, float):
        low = format_number(low)
    if isinstance(high, float):
        high = format_number(high)
    return f"{low} - {high}"
