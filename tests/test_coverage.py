"""Tests for coverage tallies by status, pillar, regulation and framework."""

from esg_risk_radar.evidence.coverage import (
    calculate_coverage_by_framework,
    calculate_coverage_by_pillar,
    calculate_coverage_by_regulation,
    calculate_coverage_metrics,
)
from tests.conftest import make_evidence


# ---------------------------------------------------------------------------
# Test 1: calculate_coverage_metrics
# ---------------------------------------------------------------------------


def test_coverage_percentage_is_share_of_complete_items() -> None:
    items = [
        make_evidence("ev-1", status="complete"),
        make_evidence("ev-2", status="complete"),
        make_evidence("ev-3", status="complete"),
        make_evidence("ev-4", status="partial"),
        make_evidence("ev-5", status="missing"),
    ]

    metrics = calculate_coverage_metrics(items)

    assert metrics.total == 5
    assert metrics.complete == 3
    assert metrics.partial == 1
    assert metrics.missing == 1
    assert metrics.expired == 0
    assert metrics.coverage_percentage == 60


def test_empty_input_yields_zero_metrics() -> None:
    metrics = calculate_coverage_metrics([])
    assert metrics.total == 0
    assert metrics.coverage_percentage == 0


def test_unknown_status_counts_in_total_only() -> None:
    items = [make_evidence("ev-1", status="complete"), make_evidence("ev-2", status="archived")]

    metrics = calculate_coverage_metrics(items)

    assert metrics.total == 2
    assert metrics.complete + metrics.partial + metrics.missing + metrics.expired == 1
    assert metrics.coverage_percentage == 50


def test_percentage_rounds_half_up() -> None:
    # 1/8 = 12.5%
    items = [make_evidence("ev-0", status="complete")] + [
        make_evidence(f"ev-{i}", status="missing") for i in range(1, 8)
    ]
    assert calculate_coverage_metrics(items).coverage_percentage == 13


def test_expired_items_are_tallied() -> None:
    items = [make_evidence("ev-1", status="expired"), make_evidence("ev-2", status="complete")]
    metrics = calculate_coverage_metrics(items)
    assert metrics.expired == 1
    assert metrics.coverage_percentage == 50


# ---------------------------------------------------------------------------
# Test 2: Partitioning
# ---------------------------------------------------------------------------


def test_pillar_coverage_partitions_by_category() -> None:
    items = [
        make_evidence("ev-1", category="environmental", status="complete"),
        make_evidence("ev-2", category="environmental", status="missing"),
        make_evidence("ev-3", category="social", status="complete"),
    ]

    coverage = calculate_coverage_by_pillar(items)

    assert coverage.environmental.total == 2
    assert coverage.environmental.coverage_percentage == 50
    assert coverage.social.coverage_percentage == 100
    assert coverage.governance.total == 0
    assert coverage.governance.coverage_percentage == 0


def test_regulation_coverage_fans_out_across_tags() -> None:
    """An item tagged with two regulations counts in both buckets."""
    items = [
        make_evidence("ev-1", status="complete", regulation=["CSRD", "EUDR"]),
        make_evidence("ev-2", status="missing", regulation=["CSRD"]),
        make_evidence("ev-3", status="complete"),
    ]

    coverage = calculate_coverage_by_regulation(items)

    assert list(coverage) == ["CSRD", "EUDR"]
    assert coverage["CSRD"].total == 2
    assert coverage["CSRD"].coverage_percentage == 50
    assert coverage["EUDR"].total == 1
    assert coverage["EUDR"].coverage_percentage == 100


def test_repeated_tag_on_one_item_counts_once() -> None:
    items = [make_evidence("ev-1", regulation=["CSRD", "CSRD"])]
    assert calculate_coverage_by_regulation(items)["CSRD"].total == 1


def test_untagged_items_produce_no_buckets() -> None:
    assert calculate_coverage_by_regulation([make_evidence("ev-1")]) == {}


def test_framework_coverage_uses_framework_tags() -> None:
    items = [
        make_evidence("ev-1", status="complete", framework=["GRI", "TCFD"]),
        make_evidence("ev-2", status="partial", framework=["TCFD"]),
    ]

    coverage = calculate_coverage_by_framework(items)

    assert coverage["GRI"].coverage_percentage == 100
    assert coverage["TCFD"].total == 2
    assert coverage["TCFD"].partial == 1
    assert coverage["TCFD"].coverage_percentage == 50
