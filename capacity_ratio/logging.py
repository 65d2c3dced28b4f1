"""
Structured Logging for capacity-ratio

structlog on top of the standard library logging module. Logging is set up
explicitly by the composition root (CLI or embedding scheduler) through
setup_logging(); importing the package never touches global logging state.

Loggers always wrap a stdlib logger, so until the host configures logging,
records follow the stdlib rules (level filtering, the host's handlers) and
nothing is printed by structlog itself.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import LoggingConfig

# Run on structlog events and on records from plain stdlib loggers alike.
_SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="ISO"),
]


def _build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    """Stdlib formatter rendering each record exactly once."""
    if log_format == "json":
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def setup_logging(config: Optional[LoggingConfig] = None):
    """Configure structlog and the root stdlib logger."""
    if config is None:
        config = LoggingConfig()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_build_formatter(config.log_format))
    root_logger.addHandler(console_handler)

    logging.getLogger("capacity_ratio").debug(
        f"Logging initialized - log_level={config.log_level}, log_format={config.log_format}"
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to the stdlib logger of the same name."""
    return structlog.wrap_logger(logging.getLogger(name))
