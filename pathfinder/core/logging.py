"""structlog setup for the client.

Modules obtain loggers with ``structlog.get_logger()`` at import time; this
only decides level and rendering, so it is safe to call more than once.
"""

import logging

import structlog

from pathfinder.core.config import Settings, settings


def configure_logging(config: Settings | None = None) -> None:
    """Configure structlog processors from settings.

    Args:
        config: Settings to read ``log_level`` and ``log_json`` from.
            Defaults to the module-level settings.
    """
    config = config or settings
    level = logging.getLevelNamesMapping().get(config.log_level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if config.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
