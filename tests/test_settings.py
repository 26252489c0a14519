"""Tests for environment-driven settings and logging setup."""

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest
import structlog

from esg_risk_radar.core.models import RiskRadarConfig
from esg_risk_radar.evidence.inventory import build_evidence_inventory
from esg_risk_radar.exposure.config_validation import validate_risk_radar_config
from esg_risk_radar.exposure.engine import calculate_exposure
from esg_risk_radar.observability import configure_logging, get_logger
from esg_risk_radar.settings import get_settings
from tests.conftest import make_config, make_evidence, make_requirement


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Test 1: Settings
# ---------------------------------------------------------------------------


def test_defaults() -> None:
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.min_supply_chain_tiers == 1
    assert settings.max_supply_chain_tiers == 4
    assert settings.synthesize_trend is False


def test_environment_overrides_tier_bounds(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ESG_RADAR_MAX_SUPPLY_CHAIN_TIERS", "6")
    get_settings.cache_clear()

    config = RiskRadarConfig(sector_code="C", geographies=["EU"], supply_chain_tiers=6)

    assert get_settings().max_supply_chain_tiers == 6
    assert validate_risk_radar_config(config).valid is True


@pytest.fixture()
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Test 2: Logging
# ---------------------------------------------------------------------------


@pytest.mark.usefixtures("_restore_logging")
def test_engine_calls_are_silent_until_logging_is_configured(
    capsys: pytest.CaptureFixture[str], fixed_now: datetime
) -> None:
    """Debug and info events never reach stdout without host configuration."""
    calculate_exposure(make_config(), now=fixed_now)
    build_evidence_inventory(
        "org-1", [make_evidence()], [make_requirement()], now=fixed_now
    )

    assert capsys.readouterr().out == ""


@pytest.mark.usefixtures("_restore_logging")
def test_module_loggers_emit_through_standard_logging(
    caplog: pytest.LogCaptureFixture, fixed_now: datetime
) -> None:
    with caplog.at_level(logging.DEBUG, logger="esg_risk_radar"):
        calculate_exposure(make_config(), now=fixed_now)

    assert [r.name for r in caplog.records] == ["esg_risk_radar.exposure.engine"]
    assert "Exposure calculated" in caplog.records[0].getMessage()


@pytest.mark.usefixtures("_restore_logging")
@pytest.mark.parametrize("log_format", ["json", "console"])
def test_configure_logging_accepts_both_renderers(log_format: str) -> None:
    configure_logging(log_level="DEBUG", log_format=log_format)
    get_logger("esg_risk_radar.test").info("Logging configured", log_format=log_format)
