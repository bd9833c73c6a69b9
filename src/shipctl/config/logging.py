"""structlog setup shared by every shipctl command.

Everything goes to stderr so stdout stays clean for results. The
console renderer is used by default (colored on a TTY); ``--log-json``
switches to one JSON object per line with structured tracebacks.
stdlib records from ``logging.getLogger(__name__)`` pass through the same
processor chain as structlog events.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Chatty at INFO; only their warnings are worth showing.
_LIBRARY_LOGGERS = ("alembic", "sqlalchemy.engine")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _final_processors(log_json: bool) -> list[Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to one stderr handler.

    Calling it again replaces the previous handler, so the last
    invocation's flags win.

    Args:
        verbose: DEBUG for the ``shipctl`` logger, WARNING otherwise.
        log_json: JSON lines instead of the console renderer.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_final_processors(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("shipctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
