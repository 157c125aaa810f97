"""structlog setup shared by the CLI and the pipeline."""

import logging
import sys
from typing import Optional

import structlog

from config import settings
from errors import ConfigurationError


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure structlog once per process.

    Args:
        level: Minimum level name; defaults to settings.log_level
        json_logs: Render JSON lines instead of the console format

    Raises:
        ConfigurationError: If the level name is not a logging level
    """
    level_name = (level or settings.log_level).upper()
    level_number = logging.getLevelName(level_name)
    if not isinstance(level_number, int):
        raise ConfigurationError(f"unknown log level '{level_name}'", field="log_level")
    use_json = settings.log_json if json_logs is None else json_logs

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
