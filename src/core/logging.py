"""
Structured logging for the listing search API (structlog).

configure_logging() runs once in the app lifespan: a colored console
renderer in development, one JSON object per line in production. The
tracing middleware binds request_id, method and path, so every event a
search emits carries them:

    Remote term extraction complete        info     query, terms, latency_ms
    Remote term extraction failed, ...     warning  query, error (local fallback used)
    Candidate fetch failed                 error    table, window, error (empty candidates)
    Listing search complete                info     source, scanned, matched, returned
    Request completed                      info     status_code, elapsed_ms

Usage:
    from core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Listing search complete", source="local", returned=12)
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor


# HTTP clients under OpenAI and Supabase, and uvicorn, log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "openai", "uvicorn.access")


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger for the search API.

    Args:
        json_logs: JSON output when True (production), colored console otherwise.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_timestamp: Whether to prefix events with an ISO timestamp
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Logger for a search module, usually get_logger(__name__)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Attach request-scoped fields to every event logged in this context.

    The tracing middleware binds request_id, method and path on entry, so
    extractor fallbacks and storage failures can be traced to a request.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop the request-scoped fields; called by the middleware when a request ends."""
    structlog.contextvars.clear_contextvars()
