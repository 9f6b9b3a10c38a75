"""Logging setup: structlog rendering on top of stdlib handlers.

Library modules log through either ``logging.getLogger(__name__)`` or
``structlog.get_logger(__name__)``.  :func:`configure_logging` routes both
through one stderr handler so the CLI's stdout stays clean for results.

Output modes:

- console (default): ``structlog.dev.ConsoleRenderer``, colored on a TTY
- JSON (``--log-json``): one JSON object per line
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "soupdecode"

# Parser backends chatter at DEBUG/INFO about markup heuristics.
QUIET_LOGGERS = ("bs4", "soupsieve", "html5lib")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(*, log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install the soupdecode log handler on the root logger.

    Safe to call repeatedly: existing root handlers are replaced.

    Args:
        verbose: DEBUG for ``soupdecode.*`` loggers; otherwise WARNING.
        log_json: Render JSON lines instead of console text.
        stream: Destination; defaults to the current ``sys.stderr``.
    """
    stream = stream or sys.stderr
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json=log_json, stream=stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
