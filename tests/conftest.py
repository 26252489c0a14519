"""Test fixtures and builders for esg-risk-radar.

Provides:
- fixed_now: a pinned UTC timestamp so derived dates are deterministic
- make_* builders for reference data, configs, evidence and requirements
- make_inventory: an EvidenceInventory whose coverage is aggregated from its items
"""

from datetime import UTC, datetime

import pytest

from esg_risk_radar.core.models import (
    EvidenceInventory,
    EvidenceItem,
    EvidenceMetadata,
    EvidenceRequirement,
    ExposureSignal,
    GeographyProfile,
    InventoryCoverage,
    RegulatoryExposure,
    RiskFactor,
    RiskRadarConfig,
    SectorProfile,
    SectorRiskFactors,
)
from esg_risk_radar.evidence.coverage import (
    calculate_coverage_by_framework,
    calculate_coverage_by_pillar,
    calculate_coverage_by_regulation,
)

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture()
def fixed_now() -> datetime:
    """Return a pinned UTC timestamp (2026-03-15 12:00).

    Returns:
        A timezone-aware datetime.
    """
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Exposure builders
# ---------------------------------------------------------------------------


def make_risk_factor(
    severity: str = "medium",
    category: str = "climate",
    description: str | None = None,
) -> RiskFactor:
    return RiskFactor(
        category=category,
        severity=severity,
        description=description or f"{severity} {category} risk",
        indicators=[f"{category} indicator"],
        regulatory_triggers=[],
    )


def make_regulation(
    regulation: str = "CSRD",
    region: str = "EU",
    pressure_level: str = "high",
    applicability: str = "direct",
) -> RegulatoryExposure:
    return RegulatoryExposure(
        regulation=regulation,
        region=region,
        applicability=applicability,
        pressure_level=pressure_level,
        requirements=[f"{regulation} requirement"],
        evidence_needed=[f"{regulation} evidence"],
    )


def make_sector_profile(
    environmental: list[RiskFactor] | None = None,
    social: list[RiskFactor] | None = None,
    governance: list[RiskFactor] | None = None,
    regulatory_exposure: list[RegulatoryExposure] | None = None,
    code: str = "C",
) -> SectorProfile:
    return SectorProfile(
        code=code,
        name="Manufacturing",
        risk_factors=SectorRiskFactors(
            environmental=environmental or [],
            social=social or [],
            governance=governance or [],
        ),
        regulatory_exposure=regulatory_exposure or [],
    )


def make_geography(
    code: str = "EU",
    active: list[RegulatoryExposure] | None = None,
    upcoming: list[RegulatoryExposure] | None = None,
) -> GeographyProfile:
    return GeographyProfile(
        code=code,
        name=code,
        region=code,
        active_regulations=active or [],
        upcoming_regulations=upcoming or [],
    )


def make_config(
    geographies: list[str] | None = None,
    sector_code: str = "C",
    supply_chain_tiers: int = 2,
    organization_id: str | None = "org-1",
) -> RiskRadarConfig:
    return RiskRadarConfig(
        sector_code=sector_code,
        geographies=["EU"] if geographies is None else geographies,
        supply_chain_tiers=supply_chain_tiers,
        organization_id=organization_id,
    )


def make_signal(
    signal_id: str = "reg-EU-0",
    related_regulation: str | None = "EUDR",
    severity: str = "critical",
) -> ExposureSignal:
    return ExposureSignal(
        id=signal_id,
        type="regulatory" if related_regulation else "environmental",
        category=related_regulation or "climate",
        severity=severity,
        description=f"{signal_id} signal",
        source="Regulatory Intelligence",
        timestamp=FIXED_NOW.isoformat(),
        related_regulation=related_regulation,
        evidence_required=severity in ("critical", "high"),
    )


# ---------------------------------------------------------------------------
# Evidence builders
# ---------------------------------------------------------------------------


def make_evidence(
    evidence_id: str = "ev-1",
    status: str = "complete",
    category: str = "environmental",
    regulation: list[str] | None = None,
    framework: list[str] | None = None,
    expires_at: str | None = None,
    evidence_type: str = "document",
    title: str | None = None,
) -> EvidenceItem:
    """Build a minimal EvidenceItem for tests."""
    return EvidenceItem(
        id=evidence_id,
        title=title or f"Evidence {evidence_id}",
        type=evidence_type,
        category=category,
        status=status,
        uploaded_at="2026-01-10T09:00:00+00:00",
        expires_at=expires_at,
        metadata=EvidenceMetadata(
            regulation=regulation or [],
            framework=framework or [],
        ),
        readiness_score=80,
    )


def make_requirement(
    requirement_id: str = "req-1",
    regulation: str = "EUDR",
    category: str = "environmental",
    mandatory: bool = True,
    frequency: str | None = None,
    evidence_types: list[str] | None = None,
) -> EvidenceRequirement:
    return EvidenceRequirement(
        id=requirement_id,
        regulation=regulation,
        requirement=f"{regulation} due diligence statement",
        category=category,
        evidence_types=evidence_types or ["document", "certificate"],
        mandatory=mandatory,
        frequency=frequency,
    )


def make_inventory(
    items: list[EvidenceItem] | None = None,
    organization_id: str = "org-1",
) -> EvidenceInventory:
    """Build an inventory with coverage aggregated from the given items."""
    evidence = items or []
    return EvidenceInventory(
        organization_id=organization_id,
        last_updated=FIXED_NOW.isoformat(),
        items=evidence,
        coverage=InventoryCoverage(
            by_pillar=calculate_coverage_by_pillar(evidence),
            by_regulation=calculate_coverage_by_regulation(evidence),
            by_framework=calculate_coverage_by_framework(evidence),
        ),
    )
