"""structlog setup shared by every ingestion entry point."""

import logging

import structlog

from issue_ingest.config.config import Settings, settings


def configure_logging(config: Settings = settings) -> None:
    """Configure structlog with ISO timestamps and a JSON or console renderer.

    Events below ``config.log_level`` are dropped before rendering.
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level!r}")

    renderer = structlog.processors.JSONRenderer() if config.log_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
