"""Shape guards for stored Risk Radar configurations.

The exposure engine is only ever fed sanitised configurations. These helpers
sit between the host's key-value store and the engine:

- sanitize_risk_radar_config: normalise a raw mapping into a RiskRadarConfig
- validate_risk_radar_config: report problems as a flat list of messages
- parse_risk_radar_config: JSON text -> sanitised, validated config, with every
  failure returned as an error string rather than raised
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from esg_risk_radar.core.models import RiskRadarConfig
from esg_risk_radar.core.timeutil import resolve_now, to_iso
from esg_risk_radar.observability import get_logger
from esg_risk_radar.settings import get_settings

logger = get_logger(__name__)

ERROR_SECTOR_REQUIRED = "Sector code is required"
ERROR_GEOGRAPHY_REQUIRED = "At least one geography must be selected"
ERROR_INVALID_FORMAT = "Invalid configuration format"


@dataclass
class ConfigValidationResult:
    """Outcome of validate_risk_radar_config().

    Attributes:
        valid: True when errors is empty.
        errors: Human-readable problems, in check order.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class ConfigParseResult:
    """Outcome of parse_risk_radar_config().

    Attributes:
        config: The sanitised config, or None if absent or invalid.
        error: Why parsing failed; None on success and for empty input.
    """

    config: RiskRadarConfig | None
    error: str | None = None


def sanitize_risk_radar_config(
    raw: Mapping[str, Any] | RiskRadarConfig,
    *,
    now: datetime | None = None,
) -> RiskRadarConfig:
    """Normalise a raw configuration.

    - The sector code is trimmed.
    - Geographies are trimmed; empty and duplicate entries are dropped
      (first occurrence wins).
    - A missing or zero tier count becomes 1. Other values are kept so the
      validator can report them.
    - updated_at defaults to now.

    Args:
        raw: Mapping with camelCase or snake_case keys, or an existing config.
        now: Timestamp used for a missing updated_at.

    Returns:
        A new RiskRadarConfig.

    Raises:
        ValidationError: If a field has a type the model cannot coerce.
    """
    data = raw.model_dump() if isinstance(raw, RiskRadarConfig) else raw

    sector_code = _pick(data, "sector_code", "sectorCode")
    tiers = _pick(data, "supply_chain_tiers", "supplyChainTiers")
    if tiers is None or tiers is False or tiers == 0:
        tiers = 1

    return RiskRadarConfig(
        sector_code=sector_code.strip() if isinstance(sector_code, str) else "",
        geographies=_clean_geographies(_pick(data, "geographies")),
        supply_chain_tiers=tiers,
        organization_id=_pick(data, "organization_id", "organizationId"),
        id=_pick(data, "id"),
        created_at=_pick(data, "created_at", "createdAt"),
        updated_at=_pick(data, "updated_at", "updatedAt") or to_iso(resolve_now(now)),
    )


def validate_risk_radar_config(
    config: RiskRadarConfig,
    *,
    min_tiers: int | None = None,
    max_tiers: int | None = None,
) -> ConfigValidationResult:
    """Check a configuration and collect every problem found.

    Args:
        config: The configuration to check.
        min_tiers: Lowest accepted tier depth. Defaults to the
            ESG_RADAR_MIN_SUPPLY_CHAIN_TIERS setting.
        max_tiers: Highest accepted tier depth. Defaults to the
            ESG_RADAR_MAX_SUPPLY_CHAIN_TIERS setting.

    Returns:
        ConfigValidationResult; never raises.
    """
    settings = get_settings()
    lower = settings.min_supply_chain_tiers if min_tiers is None else min_tiers
    upper = settings.max_supply_chain_tiers if max_tiers is None else max_tiers

    errors: list[str] = []
    if not config.sector_code.strip():
        errors.append(ERROR_SECTOR_REQUIRED)
    if not any(code.strip() for code in config.geographies):
        errors.append(ERROR_GEOGRAPHY_REQUIRED)
    if not lower <= config.supply_chain_tiers <= upper:
        errors.append(f"Supply chain tiers must be between {lower} and {upper}")

    return ConfigValidationResult(valid=not errors, errors=errors)


def parse_risk_radar_config(text: str | None) -> ConfigParseResult:
    """Parse, sanitise and validate a stored JSON configuration.

    Args:
        text: The stored JSON blob. None or "" means nothing is stored.

    Returns:
        ConfigParseResult with either a config or an error message. Parse and
        validation failures are never raised.
    """
    if not text:
        return ConfigParseResult(config=None)

    try:
        parsed = json.loads(text)
        if not isinstance(parsed, Mapping):
            return ConfigParseResult(config=None, error=ERROR_INVALID_FORMAT)
        config = sanitize_risk_radar_config(parsed)
    except json.JSONDecodeError as exc:
        logger.warning("Stored Risk Radar config is not valid JSON", error=str(exc))
        return ConfigParseResult(config=None, error=str(exc))
    except ValidationError as exc:
        message = _format_validation_error(exc)
        logger.warning("Stored Risk Radar config has an invalid shape", error=message)
        return ConfigParseResult(config=None, error=message)

    validation = validate_risk_radar_config(config)
    if not validation.valid:
        return ConfigParseResult(config=None, error=", ".join(validation.errors))

    return ConfigParseResult(config=config)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-None value among the given keys."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _clean_geographies(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    cleaned: list[str] = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        code = entry.strip()
        if code and code not in cleaned:
            cleaned.append(code)
    return cleaned


def _format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
