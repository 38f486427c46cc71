"""Centralized logging configuration for tokenkit.

Provides:
- Console logging on stderr
- Optional rotating file log (3 backups by default)
- Structured JSON formatter
- Category loggers for the scan, resolve, export and storage stages
"""

import json
import logging
import logging.config
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

ROOT_LOGGER = "tokenkit"


class LogCategory(Enum):
    """Log categories for the token pipeline stages."""

    SCAN = "scan"
    RESOLVE = "resolve"
    EXPORT = "export"
    STORAGE = "storage"
    CLI = "cli"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a single JSON line."""
        log_entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_fields = ["collection_id", "variable_id", "mode_id", "token_count"]
        for field in extra_fields:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    level: str = "INFO",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10485760,
) -> logging.Logger:
    """Setup global logging configuration.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR).
        quiet: Suppress console output (only ERROR level).
        verbose: Enable debug-level output.
        log_file: Optional log file path; no file logging when omitted.
        log_format: File output format ("text" or "json").
        rotation_count: Number of backup files.
        max_bytes: Max file size before rotation.

    Returns:
        Configured root tokenkit logger.
    """
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"
    else:
        effective_level = level.upper()

    config: dict = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s | %(message)s"},
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": effective_level,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            ROOT_LOGGER: {"handlers": ["console"], "level": "DEBUG", "propagate": False}
        },
    }

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json" if log_format == "json" else "detailed",
            "level": "DEBUG",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
        }
        config["loggers"][ROOT_LOGGER]["handlers"].append("file")

    logging.config.dictConfig(config)
    return logging.getLogger(ROOT_LOGGER)


def get_logger() -> logging.Logger:
    """Get the global tokenkit logger."""
    return logging.getLogger(ROOT_LOGGER)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Get a logger for a specific pipeline stage.

    Example:
        >>> logger = get_category_logger(LogCategory.EXPORT)
        >>> logger.info("Rendered 12 variables")
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{category.value}")
