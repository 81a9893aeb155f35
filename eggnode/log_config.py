# eggnode/log_config.py
from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

# Processors shared by structlog's own loggers and by records coming from
# plain `logging` (every eggnode module logs through the stdlib).
shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
]

_HANDLER_NAME = "eggnode"


def configure_logging(
    level: int | str = logging.INFO,
    *,
    json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """
    Routes eggnode's log records (and structlog loggers) to `stream`.

    Console output is coloured and human readable; `json=True` renders one
    JSON object per record instead. Calling it again replaces the handler
    installed by the previous call.
    """
    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=stream is None and sys.stderr.isatty())
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        # Records from stdlib loggers have not been through structlog yet.
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("eggnode")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
