"""Structured logging for the slider.

The slider is a library embedded in some host, so logging is scoped to the
``carousel_slider`` logger hierarchy: the host's root logger and handlers are
left alone. Development runs get a colored console renderer, production runs
get JSON lines.

Usage:
    from carousel_slider.core.logging import configure_logging, get_logger

    # Once, in the host application
    configure_logging(development=True)

    # In modules
    logger = get_logger(__name__)
    logger.debug("slider_transition", from_state="idle", to_state="pressed")
"""

import logging
import sys
from os import getenv
from typing import cast

import structlog
from structlog.types import Processor

LOGGER_NAME = "carousel_slider"


class _SliderHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Marker type so repeated configuration replaces our handler only."""


def _build_processors(development: bool) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if development:
        return [*shared, structlog.dev.ConsoleRenderer(colors=True)]
    return [
        *shared,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> logging.Logger:
    """Configure structured logging for the ``carousel_slider`` loggers.

    Calling this again swaps the renderer and level without stacking
    handlers.

    Args:
        development: If True, use pretty-printed output. If False, use JSON.
                    If None, reads from ENVIRONMENT env var (default: development).
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR).
                  If None, reads from LOG_LEVEL env var (default: INFO).

    Returns:
        The configured ``carousel_slider`` stdlib logger.
    """
    if development is None:
        env = getenv("ENVIRONMENT", "development").lower()
        development = env != "production"

    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=_build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if isinstance(existing, _SliderHandler):
            package_logger.removeHandler(existing)

    handler = _SliderHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False
    return package_logger


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
