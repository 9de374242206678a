# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Structured Logging
JSON-formatted logs via structlog. Every log entry carries the app name.
A filter run binds its request_id, grid_size and threshold_factor, and
each grid phase binds its phase index and offset, so per-phase events
can be grouped.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog.types import EventDict, Processor

from gms_filter.config import get_settings


def _add_app_info(
    logger: Any, method: str, event_dict: EventDict
) -> EventDict:
    """Inject application name into every log entry."""
    event_dict["app"] = "gms_filter"
    return event_dict


def _drop_color_message_key(
    logger: Any, method: str, event_dict: EventDict
) -> EventDict:
    """Remove uvicorn's color_message to keep logs clean."""
    event_dict.pop("color_message", None)
    return event_dict


def configure_logging() -> None:
    """
    Configure structlog for JSON output in production and
    human-readable console output in development (DEBUG level).
    Called once at application or script startup.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_app_info,
        _drop_color_message_key,
    ]

    if settings.log_level == "DEBUG":
        # Pretty console output for local development
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        # JSON output for production / CI
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging level (for uvicorn/fastapi passthrough)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str = "gms_filter") -> structlog.BoundLogger:
    """
    Return a structlog bound logger.

    Usage:
        log = get_logger(__name__)
        log.info("phase_selection_complete", phase=2, inliers=57)

    To tag everything logged inside a filter run or a phase:
        with filter_log_context(request_id=request_id, grid_size=10):
            log.info("filter_request")
    """
    return structlog.get_logger(name)


@contextmanager
def filter_log_context(**context: Any) -> Iterator[None]:
    """
    Bind filter-run context to every log entry emitted inside the block.

    Keys with a None value are skipped, so unset request parameters do
    not show up as nulls. Nested blocks add to the outer context and
    restore it on exit.
    """
    bound = {k: v for k, v in context.items() if v is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield
