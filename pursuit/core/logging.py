"""Structured JSON logging for Pursuit.

Provides consistent logging across all modules with:
    - JSON format for file logs, with record IDs lifted to top-level keys
    - Short human-readable console output
    - Rotating file handler
    - Context fields (contact_id, opportunity_id, etc.)

File log lines look like:

    {"timestamp": "...", "level": "INFO", "module": "pursuit.engine.todo",
     "message": "Outreach logged", "contact_id": 12, "context": {...}}

so one contact's history can be pulled out with a plain text search.

Usage:
    from pursuit.core.logging import get_logger, setup_logging_from_config

    setup_logging_from_config(get_config())  # Call once at startup
    logger = get_logger(__name__)

    logger.info("Outreach logged", extra={"context": {"contact_id": 12}})
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from pursuit.core.config import Config

ROOT_LOGGER_NAME = "pursuit"
LOG_FILE_NAME = "pursuit.log"

# Context keys copied to the top level of JSON lines, in this order
RECORD_KEYS = ("health_system_id", "opportunity_id", "contact_id", "log_id")


def _context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


def _short_name(name: str) -> str:
    prefix = ROOT_LOGGER_NAME + "."
    return name[len(prefix):] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for file output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string with timestamp, level, module, message, any record
            IDs found in the context, and the full context
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        context = _context(record)
        for key in RECORD_KEYS:
            if context.get(key) is not None:
                log_data[key] = context[key]
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable format for console output.

    Logger names drop the "pursuit." prefix and record IDs are listed
    before other context fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        level = record.levelname[:4]
        message = record.getMessage()

        context = _context(record)
        if context:
            keys = [k for k in RECORD_KEYS if k in context]
            keys += [k for k in context if k not in RECORD_KEYS]
            message += " [" + ", ".join(f"{k}={context[k]}" for k in keys) + "]"

        line = f"{timestamp} {level:4s} {_short_name(record.name)}: {message}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


_logging_initialized = False


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """Initialize logging system.

    Call once at application startup. Later calls are no-ops.

    Args:
        log_dir: Directory for log files. Defaults to ~/.pursuit/logs
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
    """
    global _logging_initialized

    if _logging_initialized:
        return

    if log_dir is None:
        log_dir = Path.home() / ".pursuit" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    root_logger.info("Logging initialized", extra={"context": {"log_dir": str(log_dir)}})


def setup_logging_from_config(config: Config, debug: bool = False) -> None:
    """Initialize logging from application configuration.

    The console shows warnings and errors only, unless debug is requested
    on the command line or via PURSUIT_DEBUG.
    """
    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if (debug or config.debug) else logging.WARNING,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the pursuit namespace
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
