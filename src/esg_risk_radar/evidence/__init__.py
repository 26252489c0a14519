"""Evidence readiness engine for ESG Risk Radar.

Turns a collection of evidence items into coverage metrics, a readiness
snapshot with a trend series, and a ranked list of evidence gaps.

Modules:
- coverage: status tallies by pillar, regulation and framework
- readiness: readiness snapshot over aggregated coverage
- gaps: gap identification and evidence-to-requirement mapping
- inventory: one-call assembly of a derived EvidenceInventory
"""

from esg_risk_radar.evidence.coverage import (
    calculate_coverage_by_framework,
    calculate_coverage_by_pillar,
    calculate_coverage_by_regulation,
    calculate_coverage_metrics,
)
from esg_risk_radar.evidence.gaps import (
    filter_applicable_requirements,
    identify_gaps,
    map_evidence_to_requirements,
)
from esg_risk_radar.evidence.inventory import build_evidence_inventory
from esg_risk_radar.evidence.readiness import calculate_readiness

__all__ = [
    "build_evidence_inventory",
    "calculate_coverage_by_framework",
    "calculate_coverage_by_pillar",
    "calculate_coverage_by_regulation",
    "calculate_coverage_metrics",
    "calculate_readiness",
    "filter_applicable_requirements",
    "identify_gaps",
    "map_evidence_to_requirements",
]
