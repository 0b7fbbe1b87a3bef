"""
utils/logging.py — structlog setup shared by the API and the CLI.

create_app() and the `appylink` CLI call configure_logging() once. Modules
then log with a module logger and keyword context:

    logger = structlog.get_logger(__name__)
    logger.info("form_received", form="contact", client_id="ip:127.0.0.1")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from appylink_shared.config import settings

# supabase-py talks to PostgREST and GoTrue through httpx, which logs every
# request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Route structlog through stdlib logging with a JSON or console renderer.

    Args:
        log_level:  Override settings.log_level ("DEBUG", "INFO", …).
        log_format: Override settings.log_format ("json" | "console").
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    fmt = log_format or settings.log_format

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
