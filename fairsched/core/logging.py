"""
Core Logging Module

Provides centralized logging configuration with trace_id injection.
The trace_id is normally the scheduling session id, so every score computed
for one session can be followed through the logs.

Usage:
    # At process startup:
    from fairsched.core.logging import setup_logging
    setup_logging()

    # Around a scoring run:
    from fairsched.core.logging import reset_trace_id, set_trace_id
    import logging

    token = set_trace_id("ses_123")
    try:
        logging.getLogger(__name__).info("Ranking candidates")  # Will include trace_id in logs
    finally:
        reset_trace_id(token)
"""

import logging
import sys
from contextvars import ContextVar, Token
from typing import Optional


# ==================== Context Variables ====================

TRACE_ID: ContextVar[str] = ContextVar("trace_id", default="-")


def set_trace_id(trace_id: str) -> Token:
    """
    Set the trace_id for the current execution context.

    Args:
        trace_id: Scheduling session id or other trace identifier

    Returns:
        Token for reset_trace_id()
    """
    return TRACE_ID.set(trace_id)


def reset_trace_id(token: Token) -> None:
    """Restore the trace_id that was current before set_trace_id()."""
    TRACE_ID.reset(token)


def get_trace_id() -> str:
    """
    Get the trace_id for the current execution context.

    Returns:
        Current trace_id or "-" if not set
    """
    return TRACE_ID.get()


# ==================== Log Filters ====================

class TraceIdFilter(logging.Filter):
    """
    Logging filter that injects trace_id into log records.

    Reads trace_id from the contextvar and adds it to the log record,
    making it available to formatters.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


# ==================== Logging Setup ====================

_logging_setup_done = False


def setup_logging(log_level: Optional[str] = None, force: bool = False) -> None:
    """
    Configure process-wide logging with trace_id support.

    Sets up:
    - Root logger level from settings or parameter
    - Console handler with structured formatting
    - TraceIdFilter for automatic trace_id injection

    Idempotent unless force=True is specified.

    Args:
        log_level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force: If True, reconfigure even if already set up
    """
    global _logging_setup_done

    if _logging_setup_done and not force:
        return

    if log_level is None:
        from fairsched.core.config import settings
        log_level = settings.LOG_LEVEL

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if force:
        root_logger.handlers.clear()

    # Only add handler if none exist
    if not root_logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)

        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] [%(trace_id)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        console_handler.setFormatter(formatter)
        console_handler.addFilter(TraceIdFilter())

        root_logger.addHandler(console_handler)

    _logging_setup_done = True

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {log_level.upper()}")

