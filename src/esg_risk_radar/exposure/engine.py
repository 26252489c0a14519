"""Exposure engine: turns a sector/geography/supply-chain profile into exposure scores.

The engine computes, for one organisation profile:
1. Environmental, social and governance exposure from the sector's risk factors
2. Regulatory exposure from the sector's and geographies' regulations, grouped by region
3. A single signal list across all four pillars, most urgent first
4. Supply-chain hotspots, passed through from the host's footprint unchanged

Scoring is additive and capped:
- ESG pillars: 30 per high-severity factor + 15 per medium-severity factor
- Regions: 40 per critical + 25 per high + 15 per medium regulation
- Regulatory pillar: rounded mean of the region intensities

Supply-chain depth is not a multiplier here. Deeper supply chains show up as
different input data (e.g. a deeper-tier sector profile).

The engine is a pure function of its arguments apart from the generation
timestamp, which callers may pin with ``now``.
"""

from collections.abc import Sequence
from datetime import datetime

from esg_risk_radar.core.models import (
    PILLARS,
    ExposureLevel,
    ExposureSignal,
    GeographyProfile,
    PillarExposure,
    RegulatoryExposure,
    RegulatoryPressure,
    RiskFactor,
    RiskRadarConfig,
    RiskRadarOutput,
    SectorProfile,
    SupplyChainFootprint,
)
from esg_risk_radar.core.severity import (
    clamp_score,
    exposure_level_for_score,
    round_half_up,
    sort_by_severity,
    widen_severity,
)
from esg_risk_radar.core.timeutil import resolve_now, to_iso
from esg_risk_radar.observability import get_logger

logger = get_logger(__name__)

# Risk factor weights for ESG pillar scores
_FACTOR_WEIGHTS: dict[str, int] = {"high": 30, "medium": 15}

# Regulation weights for per-region intensity
_PRESSURE_WEIGHTS: dict[str, int] = {"critical": 40, "high": 25, "medium": 15}

# Regulations at these pressure levels emit an individual signal
_SIGNALLING_PRESSURE_LEVELS = ("critical", "high")

_SIGNAL_ID_PREFIX: dict[str, str] = {
    "environmental": "env",
    "social": "social",
    "governance": "gov",
}

SOURCE_SECTOR_ANALYSIS = "Sector Analysis"
SOURCE_REGULATORY_INTELLIGENCE = "Regulatory Intelligence"
DEFAULT_ORGANIZATION_ID = "unknown"


def calculate_exposure(
    config: RiskRadarConfig,
    sector_profile: SectorProfile | None = None,
    geography_profiles: Sequence[GeographyProfile] | None = None,
    supply_chain_footprint: SupplyChainFootprint | None = None,
    *,
    now: datetime | None = None,
) -> RiskRadarOutput:
    """Calculate per-pillar exposure and ranked signals for an organisation.

    Missing sources contribute no signals and no score; the function never
    raises for absent data.

    Args:
        config: Sanitised organisation profile. An empty geography list means
            the organisation has no jurisdictional (regulatory) exposure.
        sector_profile: Reference data for config.sector_code, if known.
        geography_profiles: Reference data for the configured geographies.
            Profiles whose code is not in config.geographies are ignored.
        supply_chain_footprint: Host supply-chain data; hotspots pass through.
        now: Generation timestamp. Defaults to the current UTC time.

    Returns:
        RiskRadarOutput with all four pillar levels, the sorted signal list,
        regulatory pressure by region and the footprint's hotspots.
    """
    timestamp = to_iso(resolve_now(now))

    pillar_levels: dict[str, ExposureLevel] = {}
    for pillar in PILLARS:
        factors = sector_profile.risk_factors.for_pillar(pillar) if sector_profile else []
        pillar_levels[pillar] = _score_pillar(pillar, factors, timestamp)

    applicable_geographies = _applicable_geographies(config, geography_profiles)
    regulatory_pressure, regulatory_level = _score_regulatory(
        config, sector_profile, applicable_geographies, timestamp
    )
    pillar_levels["regulatory"] = regulatory_level

    all_signals = [
        signal
        for pillar in (*PILLARS, "regulatory")
        for signal in pillar_levels[pillar].signals
    ]

    output = RiskRadarOutput(
        organization_id=config.organization_id or DEFAULT_ORGANIZATION_ID,
        generated_at=timestamp,
        overall_exposure=PillarExposure(**pillar_levels),
        exposure_signals=sort_by_severity(all_signals, key=lambda s: s.severity),
        regulatory_pressure=regulatory_pressure,
        risk_hotspots=list(supply_chain_footprint.risk_hotspots) if supply_chain_footprint else [],
        supply_chain_exposure=supply_chain_footprint,
    )

    logger.debug(
        "Exposure calculated",
        organization_id=output.organization_id,
        sector_code=config.sector_code,
        geography_count=len(config.geographies),
        supply_chain_tiers=config.supply_chain_tiers,
        environmental_score=pillar_levels["environmental"].score,
        social_score=pillar_levels["social"].score,
        governance_score=pillar_levels["governance"].score,
        regulatory_score=regulatory_level.score,
        signal_count=len(all_signals),
        region_count=len(regulatory_pressure),
    )

    return output


def generate_exposure_signals(output: RiskRadarOutput) -> list[ExposureSignal]:
    """Return the ranked signal list of a previous exposure run."""
    return list(output.exposure_signals)


def _score_pillar(pillar: str, factors: Sequence[RiskFactor], timestamp: str) -> ExposureLevel:
    """Score one ESG pillar and emit one signal per risk factor.

    Low-severity factors add nothing to the score but still produce a signal.

    Args:
        pillar: environmental | social | governance.
        factors: The sector's risk factors for this pillar.
        timestamp: Generation timestamp stamped on every signal.

    Returns:
        ExposureLevel for the pillar.
    """
    raw_score = sum(_FACTOR_WEIGHTS.get(factor.severity, 0) for factor in factors)
    score = clamp_score(raw_score)

    prefix = _SIGNAL_ID_PREFIX[pillar]
    signals: list[ExposureSignal] = []
    for index, factor in enumerate(factors):
        severity = widen_severity(factor.severity)
        signals.append(
            ExposureSignal(
                id=f"{prefix}-{index}",
                type=pillar,
                category=factor.category,
                severity=severity,
                description=factor.description,
                source=SOURCE_SECTOR_ANALYSIS,
                timestamp=timestamp,
                evidence_required=severity in ("high", "critical"),
            )
        )

    return ExposureLevel(
        level=exposure_level_for_score(score),
        score=score,
        signals=signals,
    )


def _applicable_geographies(
    config: RiskRadarConfig,
    geography_profiles: Sequence[GeographyProfile] | None,
) -> list[GeographyProfile]:
    """Return the supplied geography profiles that the organisation operates in."""
    if not geography_profiles:
        return []
    configured = {code.strip() for code in config.geographies}
    return [profile for profile in geography_profiles if profile.code.strip() in configured]


def _score_regulatory(
    config: RiskRadarConfig,
    sector_profile: SectorProfile | None,
    geography_profiles: Sequence[GeographyProfile],
    timestamp: str,
) -> tuple[list[RegulatoryPressure], ExposureLevel]:
    """Compute regulatory pressure per region and the regulatory pillar level.

    Medium and low pressure regulations count towards region intensity but do
    not emit individual signals.

    Args:
        config: Organisation profile; no geographies means no regulatory exposure.
        sector_profile: Source of sector-wide regulations, if any.
        geography_profiles: Applicable geography profiles.
        timestamp: Generation timestamp stamped on every signal.

    Returns:
        Tuple of (regulatory pressure per region in first-seen order,
        regulatory ExposureLevel).
    """
    if not config.geographies:
        return [], ExposureLevel()

    regulations: list[RegulatoryExposure] = []
    if sector_profile is not None:
        regulations.extend(sector_profile.regulatory_exposure)
    for geography in geography_profiles:
        regulations.extend(geography.active_regulations)
        regulations.extend(geography.upcoming_regulations)

    by_region: dict[str, list[RegulatoryExposure]] = {}
    for regulation in regulations:
        by_region.setdefault(regulation.region, []).append(regulation)

    pressure: list[RegulatoryPressure] = []
    signals: list[ExposureSignal] = []
    for region, region_regulations in by_region.items():
        intensity = clamp_score(
            sum(_PRESSURE_WEIGHTS.get(r.pressure_level, 0) for r in region_regulations)
        )
        pressure.append(
            RegulatoryPressure(region=region, intensity=intensity, regulations=region_regulations)
        )

        for index, regulation in enumerate(region_regulations):
            if regulation.pressure_level not in _SIGNALLING_PRESSURE_LEVELS:
                continue
            signals.append(
                ExposureSignal(
                    id=f"reg-{region}-{index}",
                    type="regulatory",
                    category=regulation.regulation,
                    severity=regulation.pressure_level,
                    description=f"{regulation.regulation} applies to your operations in {region}",
                    source=SOURCE_REGULATORY_INTELLIGENCE,
                    timestamp=timestamp,
                    related_regulation=regulation.regulation,
                    evidence_required=True,
                )
            )

    score = 0
    if pressure:
        score = round_half_up(sum(p.intensity for p in pressure) / len(pressure))

    return pressure, ExposureLevel(
        level=exposure_level_for_score(score),
        score=score,
        signals=signals,
    )
