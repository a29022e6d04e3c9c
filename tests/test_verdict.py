from predictlab.commons.types import EngineCfg
from predictlab.engine.verdict import CAUTION, MIXED, POSITIVE, STABLE, build_verdict
from predictlab.parsers.models import ParameterSeries, TimeSeriesPoint


def series(*pairs):
    return ParameterSeries(points=[TimeSeriesPoint(date=None, value=v, status=s) for v, s in pairs])


def test_empty_and_single_point_give_none():
    assert build_verdict({}) is None
    assert build_verdict({"UREIA": series((30.0, "normal"))}) is None


def test_normal_to_abnormal_is_cautionary():
    verdict = build_verdict({"CREATININA": series((1.2, "normal"), (2.5, "high"))})
    assert verdict.summary == CAUTION
    assert verdict.counts["worsening"] == 1
    assert verdict.insights == ["CREATININA left reference range (1.2 → 2.5)"]


def test_all_improving_is_positive():
    verdict = build_verdict(
        {
            "HEMOGLOBINA": series((17.0, "high"), (15.0, "normal")),
            "ALBUMINA": series((3.6, "normal"), (4.0, "normal")),
        }
    )
    assert verdict.summary == POSITIVE
    assert verdict.counts == {"improving": 2, "worsening": 0, "stable": 0}
    assert verdict.insights == ["HEMOGLOBINA returned to reference range (17 → 15)"]


def test_improving_and_worsening_tie_is_mixed():
    verdict = build_verdict(
        {
            "HEMOGLOBINA": series((17.0, "high"), (15.0, "normal")),
            "UREIA": series((35.0, "normal"), (60.0, "high")),
        }
    )
    assert verdict.summary == MIXED
    assert len(verdict.insights) == 2


def test_large_change_while_abnormal_worsens():
    verdict = build_verdict({"GLICOSE": series((100.0, "high"), (115.0, "high"))})
    assert verdict.summary == CAUTION
    assert verdict.insights == ["GLICOSE changed 15.0% and remains outside the reference range"]


def test_threshold_is_configurable():
    data = {"GLICOSE": series((100.0, "high"), (115.0, "high"))}
    verdict = build_verdict(data, EngineCfg(worsening_pct_threshold=20.0))
    assert verdict.summary == STABLE
    assert verdict.insights == []
    assert verdict.counts["stable"] == 1


def test_tiny_difference_is_stable():
    verdict = build_verdict({"PH": series((6.0, "normal"), (6.005, "normal"))})
    assert verdict.summary == STABLE
    assert verdict.counts["stable"] == 1


def test_abnormal_small_change_counts_stable():
    verdict = build_verdict({"UREIA": series((50.0, "high"), (52.0, "high"))})
    assert verdict.summary == STABLE


def test_more_worsening_than_improving_is_cautionary():
    verdict = build_verdict(
        {
            "HEMOGLOBINA": series((17.0, "high"), (15.0, "normal")),
            "UREIA": series((35.0, "normal"), (60.0, "high")),
            "CREATININA": series((1.0, "normal"), (2.1, "high")),
        }
    )
    assert verdict.counts["improving"] == 1
    assert verdict.counts["worsening"] == 2
    assert verdict.summary == CAUTION
