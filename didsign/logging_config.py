"""
Structured logging configuration for didsign.

Provides JSON-formatted logs (python-json-logger) or plain text, with a
trace_id field that carries the document name through a sign/verify call.

Environment Variables:
    DIDSIGN_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    DIDSIGN_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from didsign.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="report.pdf")
    logger.info("Signing document")
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger.

    Arguments override the DIDSIGN_LOG_LEVEL / DIDSIGN_LOG_FORMAT settings.
    Logs go to stderr so that CLI --json output on stdout stays parseable.
    """
    if level is None or log_format is None:
        from .config import load_settings

        settings = load_settings()
        level = level or settings.log_level
        log_format = log_format or settings.log_format

    numeric_level = LEVEL_MAP.get(level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.addFilter(TraceIDFilter())

    if log_format.lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID (typically the document file name)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
