"""structlog configuration for userlist.

Log lines always go to stderr so stdout stays reserved for command output
(tables, ``--json`` documents, ``--quiet`` id lists). ``--log-json`` swaps
the console renderer for one JSON object per line.

With ``-v`` the ``userlist`` loggers drop to DEBUG and httpx's own
``HTTP Request: GET ...`` lines are let through, since the listing fetch is
the only network call the CLI makes.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "userlist"

# Request lines come from httpx; httpcore's connection chatter stays hidden.
_HTTP_LOGGER = "httpx"
_HTTP_TRANSPORT_LOGGER = "httpcore"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: DEBUG for userlist, INFO for httpx request lines.
        log_json: Use JSON renderer instead of console renderer.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger(_HTTP_LOGGER).setLevel(logging.INFO if verbose else logging.WARNING)
    logging.getLogger(_HTTP_TRANSPORT_LOGGER).setLevel(logging.WARNING)
