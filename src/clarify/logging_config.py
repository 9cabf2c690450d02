"""
Logging configuration for Clarify.

Configures logging based on environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
- LOG_FORMAT: simple, detailed, json
"""

import os
import sys
import logging
import json
from datetime import datetime
from typing import Optional

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JSONFormatter(logging.Formatter):
    """Formats log records as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Passed via logger.info(..., extra={"extra_data": {...}})
        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


def build_formatter(format_style: str) -> logging.Formatter:
    """
    Create the formatter for a format style.

    Args:
        format_style: simple, detailed or json (unknown styles fall back to simple)

    Returns:
        logging.Formatter instance
    """
    if format_style == "json":
        return JSONFormatter()
    if format_style == "detailed":
        return logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    return logging.Formatter(fmt="%(levelname)s - %(message)s")


def configure_logging(
    level: Optional[str] = None,
    format_style: Optional[str] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to LOG_LEVEL env var or INFO.
        format_style: Format style (simple, detailed, json).
                     Defaults to LOG_FORMAT env var or simple.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = (format_style or os.getenv("LOG_FORMAT", "simple")).lower()

    if log_level not in VALID_LEVELS:
        sys.stderr.write(f"Warning: Invalid LOG_LEVEL '{log_level}', defaulting to INFO\n")
        log_level = "INFO"

    numeric_level = getattr(logging, log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(build_formatter(log_format))
    root_logger.addHandler(console_handler)

    root_logger.info(f"Logging configured: level={log_level}, format={log_format}")

    # Quiet down the server stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
