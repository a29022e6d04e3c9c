from predictlab.engine.insights import generate_insight, generate_insights, percent_change
from predictlab.parsers.models import ParameterSeries, TimeSeriesPoint


def pts(*pairs):
    return [TimeSeriesPoint(date=None, value=v, status=s) for v, s in pairs]


def test_needs_two_points():
    assert generate_insight([], "UREIA") is None
    assert generate_insight(pts((30.0, "normal")), "UREIA") is None


def test_stable_sentence_is_early_return():
    text = generate_insight(pts((5.0, "high"), (5.0, "high")), "HB")
    assert text == "HB remained stable at 5 between the last two exams."


def test_left_reference_range():
    text = generate_insight(pts((1.2, "normal"), (2.5, "high")), "CREATININA")
    assert text == "CREATININA rose 108.3% (from 1.2 to 2.5), left the reference range, monitor."


def test_returned_to_reference_range():
    text = generate_insight(pts((17.0, "high"), (15.0, "normal")), "HEMOGLOBINA")
    assert text == "HEMOGLOBINA fell 11.8% (from 17 to 15), returned to reference range."


def test_still_outside_and_within():
    assert generate_insight(pts((50.0, "high"), (60.0, "high")), "UREIA").endswith(
        "still outside the reference range."
    )
    assert generate_insight(pts((4.0, "normal"), (4.2, "normal")), "ALBUMINA").endswith(
        "within normal range."
    )


def test_zero_previous_reports_zero_percent():
    assert percent_change(0.0, 3.0) == 0.0
    text = generate_insight(pts((0.0, "normal"), (3.0, "normal")), "BASÓFILOS")
    assert text == "BASÓFILOS rose 0% (from 0 to 3), within normal range."


def test_only_last_two_points_count():
    text = generate_insight(pts((100.0, "high"), (10.0, "normal"), (12.0, "normal")), "X")
    assert text.startswith("X rose 20% (from 10 to 12)")


def test_generate_insights_skips_short_series():
    series = {
        "UREIA": ParameterSeries(points=pts((30.0, "normal"), (45.0, "high"))),
        "GLICOSE": ParameterSeries(points=pts((90.0, "normal"))),
    }
    out = generate_insights(series)
    assert list(out) == ["UREIA"]
    assert out["UREIA"].startswith("UREIA rose 50%")
