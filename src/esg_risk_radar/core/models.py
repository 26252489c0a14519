"""Pydantic models for every structure crossing the engine boundary.

All models are immutable. Python attributes are snake_case; the JSON form
uses the camelCase names of the host application (``organizationId``,
``coveragePercentage``, ...). Models validate from either spelling and
serialise with to_json_dict(). Timestamps are ISO-8601 strings throughout.

Models are grouped by engine:
- Reference data: RiskFactor, SectorProfile, GeographyProfile, RegulatoryExposure
- Exposure engine: RiskRadarConfig, ExposureSignal, ExposureLevel, RiskRadarOutput
- Evidence engine: EvidenceItem, CoverageMetrics, EvidenceGap, ReadinessSnapshot,
  EvidenceRequirement, EvidenceInventory
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from esg_risk_radar.core.severity import RiskFactorSeverity, SignalSeverity
from esg_risk_radar.core.timeutil import parse_timestamp

Pillar = Literal["environmental", "social", "governance"]
SignalType = Literal["environmental", "social", "governance", "regulatory"]
Applicability = Literal["direct", "indirect", "upstream", "downstream"]
RequirementFrequency = Literal["one-time", "annual", "quarterly", "ongoing"]

PILLARS: tuple[Pillar, ...] = ("environmental", "social", "governance")

# Evidence statuses recognised by the coverage tally. Any other value is
# counted in CoverageMetrics.total only.
STATUS_COMPLETE = "complete"
STATUS_PARTIAL = "partial"
STATUS_MISSING = "missing"
STATUS_EXPIRED = "expired"


class RadarModel(BaseModel):
    """Base model: frozen, camelCase aliases, accepts either field spelling."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dict using camelCase keys.

        Unset optional fields are omitted, mirroring how the host stores them.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class RiskFactor(RadarModel):
    """One identified hazard within a sector pillar."""

    category: str
    severity: RiskFactorSeverity
    description: str
    indicators: list[str] = Field(default_factory=list)
    regulatory_triggers: list[str] = Field(default_factory=list)


class SectorRiskFactors(RadarModel):
    """Risk factors of a sector, one list per pillar."""

    environmental: list[RiskFactor] = Field(default_factory=list)
    social: list[RiskFactor] = Field(default_factory=list)
    governance: list[RiskFactor] = Field(default_factory=list)

    def for_pillar(self, pillar: Pillar) -> list[RiskFactor]:
        return getattr(self, pillar)


class RegulatoryExposure(RadarModel):
    """Applicability of one regulation to the organisation.

    Attributes:
        regulation: Regulation name (e.g., "CSRD", "EUDR").
        region: Region the regulation applies in; used to group pressure.
        applicability: direct | indirect | upstream | downstream.
        pressure_level: critical | high | medium | low.
        deadline: Optional ISO-8601 compliance date.
        requirements: What the regulation requires.
        evidence_needed: Evidence an auditor would expect.
    """

    regulation: str
    region: str
    applicability: Applicability
    pressure_level: SignalSeverity
    deadline: str | None = None
    requirements: list[str] = Field(default_factory=list)
    evidence_needed: list[str] = Field(default_factory=list)


class SectorProfile(RadarModel):
    """Reference risk data for one sector code."""

    code: str
    name: str | None = None
    risk_factors: SectorRiskFactors = Field(default_factory=SectorRiskFactors)
    regulatory_exposure: list[RegulatoryExposure] = Field(default_factory=list)


class RegulatoryIntensity(RadarModel):
    """Baseline regulatory strictness per pillar, 0-100."""

    environmental: float = Field(default=0, ge=0, le=100)
    social: float = Field(default=0, ge=0, le=100)
    governance: float = Field(default=0, ge=0, le=100)


class GeographyProfile(RadarModel):
    """Reference regulatory data for one country or region code."""

    code: str
    name: str | None = None
    region: str | None = None
    regulatory_intensity: RegulatoryIntensity = Field(default_factory=RegulatoryIntensity)
    active_regulations: list[RegulatoryExposure] = Field(default_factory=list)
    upcoming_regulations: list[RegulatoryExposure] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Exposure engine
# ---------------------------------------------------------------------------


class RiskRadarConfig(RadarModel):
    """Organisation profile fed to the exposure engine.

    Hosts build this through sanitize_risk_radar_config(); defaults here are
    deliberately lenient so the validator can report what is missing.
    """

    sector_code: str = ""
    geographies: list[str] = Field(default_factory=list)
    supply_chain_tiers: int = 1
    organization_id: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ExposureSignal(RadarModel):
    """One derived finding. ids are unique within a single engine run only."""

    id: str
    type: SignalType
    category: str
    severity: SignalSeverity
    description: str
    source: str
    timestamp: str
    related_regulation: str | None = None
    evidence_required: bool = False


class TrendPoint(RadarModel):
    """A score for one period label (``YYYY-MM``)."""

    period: str
    score: int


class ExposureLevel(RadarModel):
    """Exposure of one pillar: bucketed level, clamped score, contributing signals."""

    level: SignalSeverity = "low"
    score: int = Field(default=0, ge=0, le=100)
    signals: list[ExposureSignal] = Field(default_factory=list)
    trend: list[TrendPoint] | None = None


class PillarExposure(RadarModel):
    environmental: ExposureLevel = Field(default_factory=ExposureLevel)
    social: ExposureLevel = Field(default_factory=ExposureLevel)
    governance: ExposureLevel = Field(default_factory=ExposureLevel)
    regulatory: ExposureLevel = Field(default_factory=ExposureLevel)


class RegulatoryPressure(RadarModel):
    """Aggregate regulatory intensity of one region."""

    region: str
    intensity: int = Field(ge=0, le=100)
    regulations: list[RegulatoryExposure] = Field(default_factory=list)


class RiskHotspot(RadarModel):
    geography: str
    sector: str
    risk_level: SignalSeverity
    factors: list[str] = Field(default_factory=list)


class SupplyChainFootprint(RadarModel):
    """Supply-chain data supplied by the host; extra fields pass through untouched."""

    model_config = ConfigDict(extra="allow")

    tiers: int | None = None
    risk_hotspots: list[RiskHotspot] = Field(default_factory=list)


class RiskRadarOutput(RadarModel):
    """Full result of calculate_exposure()."""

    organization_id: str
    generated_at: str
    overall_exposure: PillarExposure
    exposure_signals: list[ExposureSignal] = Field(default_factory=list)
    regulatory_pressure: list[RegulatoryPressure] = Field(default_factory=list)
    risk_hotspots: list[RiskHotspot] = Field(default_factory=list)
    supply_chain_exposure: SupplyChainFootprint | None = None


# ---------------------------------------------------------------------------
# Evidence engine
# ---------------------------------------------------------------------------


class EvidenceFile(RadarModel):
    name: str
    size: int | None = None
    mime_type: str | None = None
    url: str | None = None


class EvidenceMetadata(RadarModel):
    framework: list[str] = Field(default_factory=list)
    regulation: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    version: str | None = None
    author: str | None = None


class EvidenceLink(RadarModel):
    """Link from an evidence item to a risk signal, regulation or assessment."""

    type: str  # risk_signal | regulation | assessment
    id: str


class EvidenceItem(RadarModel):
    """One evidence artifact.

    The engine only reads ``status``; transitions (missing -> partial ->
    complete, complete -> expired) are driven by the host. ``readiness_score``
    is assigned by the caller and aggregated, never computed, here.
    """

    id: str
    title: str
    description: str | None = None
    type: str  # document | certificate | audit | policy | report | data | other
    category: Pillar
    status: str  # complete | partial | missing | expired
    uploaded_at: str
    expires_at: str | None = None
    file: EvidenceFile | None = None
    metadata: EvidenceMetadata = Field(default_factory=EvidenceMetadata)
    linked_to: list[EvidenceLink] = Field(default_factory=list)
    readiness_score: float = Field(default=0, ge=0, le=100)

    @field_validator("uploaded_at", "expires_at")
    @classmethod
    def _require_iso_timestamp(cls, value: str | None) -> str | None:
        if value is not None:
            parse_timestamp(value)
        return value


class CoverageMetrics(RadarModel):
    """Status tally over a set of evidence items."""

    total: int = 0
    complete: int = 0
    partial: int = 0
    missing: int = 0
    expired: int = 0
    coverage_percentage: int = Field(default=0, ge=0, le=100)


class PillarCoverage(RadarModel):
    environmental: CoverageMetrics = Field(default_factory=CoverageMetrics)
    social: CoverageMetrics = Field(default_factory=CoverageMetrics)
    governance: CoverageMetrics = Field(default_factory=CoverageMetrics)


class InventoryCoverage(RadarModel):
    by_pillar: PillarCoverage = Field(default_factory=PillarCoverage)
    by_regulation: dict[str, CoverageMetrics] = Field(default_factory=dict)
    by_framework: dict[str, CoverageMetrics] = Field(default_factory=dict)


class EvidenceGap(RadarModel):
    """A missing or expired piece of evidence."""

    id: str
    category: Pillar
    regulation: str | None = None
    framework: str | None = None
    requirement: str
    severity: SignalSeverity
    description: str
    evidence_needed: list[str] = Field(default_factory=list)
    deadline: str | None = None
    linked_risk_signal: str | None = None


class PillarReadiness(RadarModel):
    environmental: int = Field(default=0, ge=0, le=100)
    social: int = Field(default=0, ge=0, le=100)
    governance: int = Field(default=0, ge=0, le=100)


class ReadinessSnapshot(RadarModel):
    """Headline readiness result of calculate_readiness()."""

    timestamp: str
    overall: int = Field(ge=0, le=100)
    by_pillar: PillarReadiness
    by_regulation: dict[str, int] = Field(default_factory=dict)
    trends: list[TrendPoint] = Field(default_factory=list)
    next_review_date: str


class RequirementApplicability(RadarModel):
    """Which organisations a requirement applies to; empty lists match all."""

    sectors: list[str] = Field(default_factory=list)
    geographies: list[str] = Field(default_factory=list)
    organization_size: list[str] | None = None


class EvidenceRequirement(RadarModel):
    """Evidence a regulation expects, supplied by the host as reference data."""

    id: str
    regulation: str
    requirement: str
    category: Pillar
    evidence_types: list[str] = Field(default_factory=list)
    mandatory: bool = False
    frequency: RequirementFrequency | None = None
    applicable_to: RequirementApplicability = Field(default_factory=RequirementApplicability)


class EvidenceInventory(RadarModel):
    """An organisation's evidence with its derived coverage, gaps and readiness."""

    organization_id: str
    last_updated: str
    items: list[EvidenceItem] = Field(default_factory=list)
    coverage: InventoryCoverage = Field(default_factory=InventoryCoverage)
    gaps: list[EvidenceGap] = Field(default_factory=list)
    readiness: ReadinessSnapshot | None = None
