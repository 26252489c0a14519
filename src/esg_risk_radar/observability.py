"""Structured logging for the ESG Risk Radar engines.

All modules obtain their logger through get_logger() and log with keyword
context (counts, scores, identifiers) rather than interpolated strings.
Loggers wrap standard library loggers, so until the host calls
configure_logging() (or configures ``logging`` itself) only warnings and
errors reach Python's last-resort stderr handler. Engine calls write nothing
to stdout.
"""

import logging

import structlog
from structlog.types import Processor

from esg_risk_radar.settings import get_settings


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, ...). Defaults to the
            ESG_RADAR_LOG_LEVEL setting.
        log_format: "json" or "console". Defaults to the ESG_RADAR_LOG_FORMAT
            setting.
    """
    settings = get_settings()
    level_name = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", level=level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger that emits through ``logging.getLogger(name)``.

    Processors and the wrapper class are resolved from the structlog
    configuration on first use, so configure_logging() applies to loggers
    created at import time.
    """
    return structlog.wrap_logger(logging.getLogger(name))
