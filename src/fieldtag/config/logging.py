"""Log routing for the fieldtag CLI.

Library modules only ever call ``logging.getLogger(__name__)``; nothing
below ``fieldtag.cli`` installs handlers. :func:`configure_logging` runs
once per CLI invocation and sends every record, stdlib or structlog, to
stderr through one structlog :class:`~structlog.stdlib.ProcessorFormatter`
so that ``--log-json`` yields one JSON object per line.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

LOGGER_NAME = "fieldtag"

# Third-party loggers held at WARNING even with --verbose.
QUIET_LOGGERS = ("pluggy",)


def _pre_chain() -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(*, log_json: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering records as JSON lines or console text."""
    final: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if log_json:
        final += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return structlog.stdlib.ProcessorFormatter(foreign_pre_chain=_pre_chain(), processors=final)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set the ``fieldtag`` logger level.

    Repeated calls replace the previous handler. The root logger stays at
    WARNING; *verbose* lowers only ``fieldtag.*`` to DEBUG (tag parses,
    rule builds, handler registration, plugin loading).
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(log_json=log_json))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
