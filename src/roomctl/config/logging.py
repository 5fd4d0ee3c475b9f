"""Logging setup for the roomctl CLI.

Library modules log through ``logging.getLogger(__name__)`` and the timing
helpers through structlog; both end up on one stderr handler rendered by
structlog, as console lines or (``--log-json``) one JSON object per line.
stdout stays reserved for command results.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Loggers roomctl owns. -v opens them to DEBUG.
ROOM_LOGGERS = ("roomctl",)
# Driver and pool chatter; kept at WARNING even under -v.
LIBRARY_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool")


def _record_processors(log_json: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        # The console renderer prints tracebacks itself.
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route every roomctl log record to stderr.

    Args:
        verbose: Let roomctl's own loggers through at DEBUG (store
            sessions, skipped interchange lines, stage timings).
        log_json: Render records as JSON lines instead of console text.
    """
    processors = _record_processors(log_json)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.WARNING)

    room_level = logging.DEBUG if verbose else logging.WARNING
    for name in ROOM_LOGGERS:
        logging.getLogger(name).setLevel(room_level)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
