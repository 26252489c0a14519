"""Exposure engine for ESG Risk Radar.

Turns a sector/geography/supply-chain profile into per-pillar exposure
levels, regulatory pressure by region and a ranked list of exposure signals.

Modules:
- engine: calculate_exposure and signal generation
- regulatory_rules: declarative geography/sector -> regulation rule table
- config_validation: sanitise, validate and parse stored configurations
"""

from esg_risk_radar.exposure.config_validation import (
    ConfigParseResult,
    ConfigValidationResult,
    parse_risk_radar_config,
    sanitize_risk_radar_config,
    validate_risk_radar_config,
)
from esg_risk_radar.exposure.engine import calculate_exposure, generate_exposure_signals
from esg_risk_radar.exposure.regulatory_rules import (
    BUILTIN_RULES,
    RegulatoryRule,
    map_regulatory_exposure,
    rules_for_geography,
)

__all__ = [
    "BUILTIN_RULES",
    "ConfigParseResult",
    "ConfigValidationResult",
    "RegulatoryRule",
    "calculate_exposure",
    "generate_exposure_signals",
    "map_regulatory_exposure",
    "parse_risk_radar_config",
    "rules_for_geography",
    "sanitize_risk_radar_config",
    "validate_risk_radar_config",
]
