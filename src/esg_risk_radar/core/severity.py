"""Severity scales, ranking and score bucketing shared by both engines.

Two severity scales exist. Risk factors authored in sector profiles use a
three-level scale with no "critical" value; exposure signals and evidence
gaps use a four-level scale. widen_severity() is the only conversion from
the former to the latter.

Ranking convention used everywhere in this package: critical=0, high=1,
medium=2, low=3. Lists are ordered "most urgent first" by sorting ascending
on severity_rank().
"""

import math
from collections.abc import Callable, Iterable
from typing import Literal, TypeVar

RiskFactorSeverity = Literal["low", "medium", "high"]
SignalSeverity = Literal["low", "medium", "high", "critical"]

SEVERITY_CRITICAL = "critical"
SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"
SEVERITY_LOW = "low"

_SEVERITY_RANK: dict[str, int] = {
    SEVERITY_CRITICAL: 0,
    SEVERITY_HIGH: 1,
    SEVERITY_MEDIUM: 2,
    SEVERITY_LOW: 3,
}

# Score thresholds for bucketing a 0-100 score into a level, highest first
_LEVEL_THRESHOLDS: tuple[tuple[int, SignalSeverity], ...] = (
    (75, "critical"),
    (50, "high"),
    (25, "medium"),
)

T = TypeVar("T")


def severity_rank(severity: str) -> int:
    """Return the urgency rank of a severity; lower is more urgent.

    Unknown values rank after "low" so they sort last.
    """
    return _SEVERITY_RANK.get(severity, len(_SEVERITY_RANK))


def sort_by_severity(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Return items ordered most urgent first.

    The sort is stable: items of equal severity keep their input order.

    Args:
        items: Objects to order.
        key: Extracts the severity string from an item.

    Returns:
        A new list sorted ascending by severity_rank().
    """
    return sorted(items, key=lambda item: severity_rank(key(item)))


def widen_severity(severity: RiskFactorSeverity) -> SignalSeverity:
    """Convert a risk-factor severity to the four-level signal scale.

    The three shared values map onto themselves; a risk factor can never
    produce a "critical" signal.
    """
    if severity not in ("low", "medium", "high"):
        raise ValueError(f"Unknown risk factor severity: {severity!r}")
    return severity


def clamp_score(value: float) -> float:
    """Clamp a score into the inclusive range [0, 100], preserving int inputs."""
    return max(0, min(100, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding (round(62.5) == 62); scores and
    percentages in this package round 62.5 to 63.
    """
    return int(math.floor(value + 0.5))


def exposure_level_for_score(score: float) -> SignalSeverity:
    """Bucket a 0-100 score: >=75 critical, >=50 high, >=25 medium, else low."""
    for threshold, level in _LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "low"
