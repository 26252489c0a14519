"""ESG Risk Radar: exposure scoring and evidence readiness engines.

Both engines are pure transformations over immutable pydantic models: the
host loads reference data, configuration and evidence through its own
persistence layer, calls the engines in-process, and renders or stores the
results itself.
"""

from esg_risk_radar.evidence import (
    build_evidence_inventory,
    calculate_coverage_by_framework,
    calculate_coverage_by_pillar,
    calculate_coverage_by_regulation,
    calculate_coverage_metrics,
    calculate_readiness,
    filter_applicable_requirements,
    identify_gaps,
    map_evidence_to_requirements,
)
from esg_risk_radar.exposure import (
    calculate_exposure,
    generate_exposure_signals,
    map_regulatory_exposure,
    parse_risk_radar_config,
    sanitize_risk_radar_config,
    validate_risk_radar_config,
)

__all__ = [
    "build_evidence_inventory",
    "calculate_coverage_by_framework",
    "calculate_coverage_by_pillar",
    "calculate_coverage_by_regulation",
    "calculate_coverage_metrics",
    "calculate_exposure",
    "calculate_readiness",
    "filter_applicable_requirements",
    "generate_exposure_signals",
    "identify_gaps",
    "map_evidence_to_requirements",
    "map_regulatory_exposure",
    "parse_risk_radar_config",
    "sanitize_risk_radar_config",
    "validate_risk_radar_config",
]
