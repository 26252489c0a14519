"""Readiness snapshot: headline readiness score from already-aggregated coverage.

calculate_readiness() is a reducer over ``inventory.coverage``; it does not
make a second pass over the evidence items. The overall score is the
rounded mean of the three pillar coverage percentages.

Trend series cover the last six calendar months including the current one,
oldest first. Each period is filled from, in order:
1. A recorded history point for that period, when the host supplies one
2. The current overall score, for the current month
3. A synthesised score (overall +/- up to 5) when synthesis is requested
4. The current overall score otherwise (a flat line)

Synthesis is opt-in because it fabricates history; hosts that store real
snapshots should pass them as ``history`` instead.
"""

import random
from collections.abc import Sequence
from datetime import datetime

from esg_risk_radar.core.models import (
    PILLARS,
    EvidenceInventory,
    EvidenceRequirement,
    PillarReadiness,
    ReadinessSnapshot,
    TrendPoint,
)
from esg_risk_radar.core.severity import clamp_score, round_half_up
from esg_risk_radar.core.timeutil import add_days, month_periods, resolve_now, to_iso
from esg_risk_radar.observability import get_logger
from esg_risk_radar.settings import get_settings

logger = get_logger(__name__)

# Review cadence policy, not configurable per call
REVIEW_INTERVAL_DAYS = 30

TREND_PERIODS = 6

# Maximum absolute deviation of a synthesised trend point from the current score
_TREND_JITTER = 5.0


def calculate_readiness(
    inventory: EvidenceInventory,
    requirements: Sequence[EvidenceRequirement] | None = None,
    *,
    history: Sequence[TrendPoint] | None = None,
    synthesize_trend: bool | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> ReadinessSnapshot:
    """Compute a readiness snapshot from an inventory's coverage.

    Args:
        inventory: Inventory whose ``coverage`` has already been aggregated.
        requirements: Accepted for call compatibility. Readiness is derived from
            coverage alone; uncovered requirements surface through identify_gaps().
        history: Recorded readiness scores keyed by ``YYYY-MM`` period.
        synthesize_trend: Fill months without history with jitter around the
            current score. Defaults to the ESG_RADAR_SYNTHESIZE_TREND setting.
        rng: Random source for synthesis; pass a seeded instance for
            reproducible trends.
        now: Computation time. Defaults to the current UTC time.

    Returns:
        ReadinessSnapshot with overall, per-pillar and per-regulation
        percentages, a six-point trend and the next review date.
    """
    moment = resolve_now(now)
    if synthesize_trend is None:
        synthesize_trend = get_settings().synthesize_trend

    pillar_coverage = inventory.coverage.by_pillar
    by_pillar = PillarReadiness(
        **{
            pillar: getattr(pillar_coverage, pillar).coverage_percentage
            for pillar in PILLARS
        }
    )
    overall = round_half_up(
        (by_pillar.environmental + by_pillar.social + by_pillar.governance) / len(PILLARS)
    )

    by_regulation = {
        regulation: metrics.coverage_percentage
        for regulation, metrics in inventory.coverage.by_regulation.items()
    }

    trends = _build_trend(
        overall,
        moment,
        history=history,
        synthesize=synthesize_trend,
        rng=rng,
    )

    snapshot = ReadinessSnapshot(
        timestamp=to_iso(moment),
        overall=overall,
        by_pillar=by_pillar,
        by_regulation=by_regulation,
        trends=trends,
        next_review_date=to_iso(add_days(moment, REVIEW_INTERVAL_DAYS)),
    )

    logger.debug(
        "Readiness calculated",
        organization_id=inventory.organization_id,
        overall=overall,
        regulation_count=len(by_regulation),
        requirement_count=len(requirements or ()),
        history_points=len(history or ()),
        synthesized=synthesize_trend,
    )

    return snapshot


def _build_trend(
    overall: int,
    moment: datetime,
    *,
    history: Sequence[TrendPoint] | None,
    synthesize: bool,
    rng: random.Random | None,
) -> list[TrendPoint]:
    """Build the six-month trend series, oldest period first.

    Args:
        overall: Current overall readiness.
        moment: Computation time; its month is the last period.
        history: Recorded points; later entries win for a repeated period.
        synthesize: Whether to jitter months without history.
        rng: Random source used when synthesising.

    Returns:
        TREND_PERIODS TrendPoints with integer scores in [0, 100].
    """
    recorded = {point.period: point.score for point in history or ()}
    periods = month_periods(moment, TREND_PERIODS)
    current_period = periods[-1]
    source = rng or random.Random()

    trend: list[TrendPoint] = []
    for period in periods:
        if period in recorded:
            score = recorded[period]
        elif period == current_period or not synthesize:
            score = overall
        else:
            score = overall + source.uniform(-_TREND_JITTER, _TREND_JITTER)
        trend.append(TrendPoint(period=period, score=round_half_up(clamp_score(score))))
    return trend
