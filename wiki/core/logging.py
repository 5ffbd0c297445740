"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor


def _renderer_chain(json_logs: bool) -> list[Processor]:
    if json_logs:
        # One object per line; tracebacks become nested dicts
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Route structlog and library logging to stderr.

    Args:
        verbose: Log at DEBUG instead of INFO.
        json_logs: Emit JSON lines (for piping into log tooling) instead of
            the human-readable console format.
    """
    level = logging.DEBUG if verbose else logging.INFO

    # playwright and urllib3 log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer_chain(json_logs),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: str) -> FilteringBoundLogger:
    """Logger for the wiki client, optionally with bound context.

    Example:
        log = get_logger(engine="weapon")
        log.info("cache_hit", address=url)
    """
    logger = structlog.get_logger(name or "wiki")
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
