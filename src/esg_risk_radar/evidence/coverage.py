"""Coverage metrics over evidence items.

A CoverageMetrics tally counts items per status. Statuses outside the four
known buckets are counted in ``total`` only, so complete + partial + missing
+ expired may be less than total. coverage_percentage is the rounded share
of complete items.

Partitioning rules differ by dimension:
- Pillar: each item belongs to exactly one pillar, its ``category``.
- Regulation / framework: an item counts in every bucket it is tagged with.
"""

from collections.abc import Iterable, Sequence

from esg_risk_radar.core.models import (
    STATUS_COMPLETE,
    STATUS_EXPIRED,
    STATUS_MISSING,
    STATUS_PARTIAL,
    CoverageMetrics,
    EvidenceItem,
    PillarCoverage,
)
from esg_risk_radar.core.severity import round_half_up


def calculate_coverage_metrics(items: Sequence[EvidenceItem]) -> CoverageMetrics:
    """Tally evidence items by status.

    Args:
        items: Evidence items to tally.

    Returns:
        CoverageMetrics with total == len(items).
    """
    counts = {STATUS_COMPLETE: 0, STATUS_PARTIAL: 0, STATUS_MISSING: 0, STATUS_EXPIRED: 0}
    for item in items:
        if item.status in counts:
            counts[item.status] += 1

    total = len(items)
    percentage = round_half_up(100 * counts[STATUS_COMPLETE] / total) if total > 0 else 0

    return CoverageMetrics(
        total=total,
        complete=counts[STATUS_COMPLETE],
        partial=counts[STATUS_PARTIAL],
        missing=counts[STATUS_MISSING],
        expired=counts[STATUS_EXPIRED],
        coverage_percentage=percentage,
    )


def calculate_coverage_by_pillar(items: Sequence[EvidenceItem]) -> PillarCoverage:
    """Tally items separately for each pillar, by their category."""
    return PillarCoverage(
        environmental=calculate_coverage_metrics(
            [i for i in items if i.category == "environmental"]
        ),
        social=calculate_coverage_metrics([i for i in items if i.category == "social"]),
        governance=calculate_coverage_metrics([i for i in items if i.category == "governance"]),
    )


def calculate_coverage_by_regulation(items: Sequence[EvidenceItem]) -> dict[str, CoverageMetrics]:
    """Tally items per regulation tag.

    An item tagged ["CSRD", "EUDR"] counts in both buckets.

    Args:
        items: Evidence items to tally.

    Returns:
        Mapping of regulation name to CoverageMetrics, in first-seen order.
    """
    return _coverage_by_tag(items, lambda item: item.metadata.regulation)


def calculate_coverage_by_framework(items: Sequence[EvidenceItem]) -> dict[str, CoverageMetrics]:
    """Tally items per framework tag, with the same fan-out as regulations."""
    return _coverage_by_tag(items, lambda item: item.metadata.framework)


def _coverage_by_tag(items, tags_of) -> dict[str, CoverageMetrics]:
    buckets: dict[str, list[EvidenceItem]] = {}
    for item in items:
        # A tag repeated on one item still counts the item once
        for tag in _unique(tags_of(item)):
            buckets.setdefault(tag, []).append(item)
    return {tag: calculate_coverage_metrics(bucket) for tag, bucket in buckets.items()}


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))
