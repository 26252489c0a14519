"""Tests for severity ranking, score bucketing and rounding helpers."""

import pytest

from esg_risk_radar.core.severity import (
    clamp_score,
    exposure_level_for_score,
    round_half_up,
    severity_rank,
    sort_by_severity,
    widen_severity,
)


def test_rank_orders_most_urgent_first() -> None:
    assert [severity_rank(s) for s in ("critical", "high", "medium", "low")] == [0, 1, 2, 3]


def test_unknown_severity_ranks_last() -> None:
    assert severity_rank("unknown") > severity_rank("low")


def test_sort_by_severity_is_stable() -> None:
    items = [("a", "low"), ("b", "high"), ("c", "critical"), ("d", "high"), ("e", "medium")]

    ordered = sort_by_severity(items, key=lambda item: item[1])

    assert [name for name, _ in ordered] == ["c", "b", "d", "e", "a"]
    assert items[0] == ("a", "low")


@pytest.mark.parametrize(
    ("score", "level"),
    [
        (0, "low"),
        (24, "low"),
        (25, "medium"),
        (49, "medium"),
        (50, "high"),
        (74, "high"),
        (75, "critical"),
        (100, "critical"),
    ],
)
def test_exposure_level_thresholds(score: int, level: str) -> None:
    assert exposure_level_for_score(score) == level


def test_round_half_up_differs_from_bankers_rounding() -> None:
    assert round_half_up(62.5) == 63
    assert round_half_up(12.5) == 13
    assert round_half_up(61.67) == 62
    assert round_half_up(52.49) == 52


def test_clamp_score_bounds_and_preserves_ints() -> None:
    assert clamp_score(120) == 100
    assert clamp_score(-4) == 0
    assert clamp_score(42) == 42
    assert isinstance(clamp_score(42), int)


def test_widen_severity_maps_onto_signal_scale() -> None:
    assert widen_severity("high") == "high"
    assert widen_severity("low") == "low"


def test_widen_severity_rejects_critical() -> None:
    with pytest.raises(ValueError):
        widen_severity("critical")  # type: ignore[arg-type]
