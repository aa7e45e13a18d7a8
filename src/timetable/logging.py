"""structlog setup for the timetable viewer.

Log lines always go to stderr: scripts/view_timetable.py prints the grid
table or its JSON on stdout, and the two must not interleave. Events are
snake_case with keyword context, e.g.
``records_loaded branch=CS division=B count=2 active=cs_b.json``.
Set LOG_JSON=true to get one JSON object per line instead.
"""

import logging
import sys

import structlog


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog and route stdlib logging (requests, urllib3) to stderr.

    Args:
        json_output: Render JSON lines instead of the coloured console format.
        log_level: Level name; unknown names fall back to INFO.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    processors.append(
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(sys.stderr)]
    root.setLevel(numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for one module of the timetable package (pass __name__)."""
    return structlog.get_logger(name)
