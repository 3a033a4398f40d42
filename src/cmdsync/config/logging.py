"""structlog configuration for cmdsync.

Both modes write to stderr so stdout stays reserved for results:
- Human (default): console renderer, colored only on a TTY
- JSON (--log-json): one JSON object per line

stdlib loggers (the HTTP store, httpx) go through the same formatter, so
their records carry the same fields as structlog events.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Per-request lines from the HTTP stack; noise even with --verbose.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(
    renderer: structlog.types.Processor,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Safe to call repeatedly; the root handler is replaced, not stacked.

    Args:
        verbose: Let ``cmdsync.*`` loggers emit DEBUG and INFO records
            (pass events, resolved ids). Otherwise only WARNING and above.
        log_json: Render JSON lines instead of console output.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_stderr_handler(renderer, shared))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("cmdsync").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
