"""Log routing for vidctl.

Everything, including stdlib ``logging`` calls from our own modules and
from libraries, goes through one structlog ``ProcessorFormatter`` on
stderr so stdout stays reserved for command output.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Third-party loggers that are too chatty at DEBUG under ``-v``.
QUIET_LIBRARIES: dict[str, int] = {
    "jinja2": logging.WARNING,
    "ruamel": logging.WARNING,
    "pluggy": logging.INFO,
}


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging to stderr.

    ``vidctl.*`` loggers emit DEBUG when *verbose*, otherwise WARNING and
    up. Calling this again replaces the previous handler.
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
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("vidctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(level)
