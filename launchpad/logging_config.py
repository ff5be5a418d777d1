"""structlog configuration for the pricing service."""

import logging
import os

import structlog


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog processors and level.

    Args:
        level: Log level name; defaults to LAUNCHPAD_LOG_LEVEL or "INFO"
        json_logs: Render JSON lines instead of console output; defaults to
            LAUNCHPAD_LOG_JSON
    """
    if level is None:
        level = os.environ.get("LAUNCHPAD_LOG_LEVEL", "INFO")
    if json_logs is None:
        json_logs = os.environ.get("LAUNCHPAD_LOG_JSON", "false").lower() in ("true", "1", "yes")

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
