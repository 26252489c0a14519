"""Library settings for esg-risk-radar.

Settings use the ESG_RADAR_ prefix and cover:
- Logging (level and renderer)
- Supply-chain tier bounds enforced by the configuration validator
- Whether readiness trends are synthesised when no history is supplied

Scoring weights, level thresholds, the six-month trend window and the
thirty-day review interval are policy constants of the engines and are not
configurable here.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for esg-risk-radar.

    Environment variable prefix: ESG_RADAR_
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging().",
    )
    log_format: str = Field(
        default="json",
        description="Log renderer: json | console.",
    )

    # -------------------------------------------------------------------------
    # Risk Radar configuration guards
    # -------------------------------------------------------------------------

    min_supply_chain_tiers: int = Field(
        default=1,
        ge=1,
        description="Lowest supply-chain tier depth accepted by validate_risk_radar_config().",
    )
    max_supply_chain_tiers: int = Field(
        default=4,
        ge=1,
        description="Highest supply-chain tier depth accepted by validate_risk_radar_config(). "
        "The exposure engine itself accepts any positive depth.",
    )

    # -------------------------------------------------------------------------
    # Readiness trends
    # -------------------------------------------------------------------------

    synthesize_trend: bool = Field(
        default=False,
        description="Synthesise a jittered trend around the current readiness score when "
        "the host supplies no recorded history. When false the trend is flat.",
    )

    model_config = SettingsConfigDict(env_prefix="ESG_RADAR_")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance, loaded from the environment once."""
    return Settings()
