"""Regulatory applicability rules: which known regulations apply to an organisation.

Each RegulatoryRule maps a geography code (optionally narrowed to a set of
sector codes) to a RegulatoryExposure template. map_regulatory_exposure()
evaluates every active rule the same way, in table order, so adding a
jurisdiction means adding a rule to BUILTIN_RULES (or passing a custom rule
list), never a new code path.

Built-in rules cover CSRD and EUDR (EU), the UK Modern Slavery Act and the
SEC climate disclosure rule (US).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from esg_risk_radar.core.models import RegulatoryExposure
from esg_risk_radar.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegulatoryRule:
    """Immutable rule mapping a geography (and optional sectors) to a regulation.

    Attributes:
        rule_id: Unique identifier for this rule (e.g., "eu-csrd").
        geography_code: Geography code the organisation must operate in (e.g., "EU").
        template: The RegulatoryExposure returned when the rule matches.
        sectors: Sector codes the rule is limited to. Empty = applies to every sector.
        is_active: Whether the rule is currently active. Inactive rules are skipped.
    """

    rule_id: str
    geography_code: str
    template: RegulatoryExposure
    sectors: frozenset[str] = field(default_factory=frozenset)
    is_active: bool = True

    def matches(self, sector: str, geographies: Iterable[str]) -> bool:
        """Return True when the rule applies to the sector/geography combination."""
        if not self.is_active or self.geography_code not in geographies:
            return False
        return not self.sectors or sector in self.sectors


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------

BUILTIN_RULES: list[RegulatoryRule] = [
    # ------------------------------------------------------------------
    # European Union
    # ------------------------------------------------------------------
    RegulatoryRule(
        rule_id="eu-csrd",
        geography_code="EU",
        template=RegulatoryExposure(
            regulation="CSRD",
            region="EU",
            applicability="direct",
            pressure_level="high",
            requirements=["Sustainability reporting", "Double materiality assessment"],
            evidence_needed=["Sustainability report", "Materiality matrix"],
        ),
    ),
    # EUDR applies to agriculture (A) and manufacturing (C) sectors only
    RegulatoryRule(
        rule_id="eu-eudr",
        geography_code="EU",
        sectors=frozenset({"A", "C"}),
        template=RegulatoryExposure(
            regulation="EUDR",
            region="EU",
            applicability="direct",
            pressure_level="critical",
            deadline="2024-12-30",
            requirements=["Due diligence", "Geolocation data", "Commodity traceability"],
            evidence_needed=[
                "Due diligence statement",
                "Geolocation coordinates",
                "Supplier declarations",
            ],
        ),
    ),
    # ------------------------------------------------------------------
    # United Kingdom
    # ------------------------------------------------------------------
    RegulatoryRule(
        rule_id="uk-modern-slavery-act",
        geography_code="UK",
        template=RegulatoryExposure(
            regulation="UK Modern Slavery Act",
            region="UK",
            applicability="direct",
            pressure_level="high",
            requirements=["Modern slavery statement", "Supply chain transparency"],
            evidence_needed=["Modern slavery statement", "Supplier audit reports"],
        ),
    ),
    # ------------------------------------------------------------------
    # United States
    # ------------------------------------------------------------------
    RegulatoryRule(
        rule_id="us-sec-climate-disclosure",
        geography_code="US",
        template=RegulatoryExposure(
            regulation="SEC Climate Disclosure",
            region="US",
            applicability="direct",
            pressure_level="medium",
            requirements=["Climate risk disclosure", "GHG emissions reporting"],
            evidence_needed=["Climate risk assessment", "Emissions data"],
        ),
    ),
]


def map_regulatory_exposure(
    sector: str,
    geographies: Sequence[str],
    supply_chain_tiers: int | None = None,
    rules: Sequence[RegulatoryRule] | None = None,
) -> list[RegulatoryExposure]:
    """Return the known regulations that apply to a sector/geography profile.

    Args:
        sector: The organisation's sector code.
        geographies: Geography codes the organisation operates in.
        supply_chain_tiers: Accepted for call compatibility; rules do not
            currently depend on supply-chain depth.
        rules: Rule table to evaluate. Defaults to BUILTIN_RULES.

    Returns:
        RegulatoryExposure templates of every matching rule, in table order.
    """
    table = BUILTIN_RULES if rules is None else rules
    geography_set = set(geographies)
    exposures = [rule.template for rule in table if rule.matches(sector, geography_set)]

    logger.debug(
        "Regulatory exposure mapped",
        sector=sector,
        geography_count=len(geography_set),
        supply_chain_tiers=supply_chain_tiers,
        rule_count=len(table),
        exposure_count=len(exposures),
    )

    return exposures


def rules_for_geography(
    geography_code: str,
    rules: Sequence[RegulatoryRule] | None = None,
) -> list[RegulatoryRule]:
    """Return the active rules of one jurisdiction, in table order.

    Args:
        geography_code: The geography code (e.g., "EU").
        rules: Rule table to search. Defaults to BUILTIN_RULES.

    Returns:
        Active rules whose geography_code matches. Empty list if none.
    """
    table = BUILTIN_RULES if rules is None else rules
    return [rule for rule in table if rule.is_active and rule.geography_code == geography_code]
