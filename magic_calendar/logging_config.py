"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from magic_calendar.config import Settings, get_settings


def _renderer(settings: Settings) -> structlog.types.Processor:
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog for the calendar.

    Development gets coloured console output, production one JSON object
    per line. Events below the configured level are dropped by the bound
    logger itself.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.magic_calendar_log_level)
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a named structured logger."""
    return structlog.get_logger(name)
