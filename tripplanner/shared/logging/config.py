"""
Logging configuration.

Provides the text log format used by the server and a JSON formatter
for structured log shipping.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai")


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter that outputs log records as JSON.

    Each log entry includes:
    - timestamp: ISO format datetime
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Any additional fields passed to the log call
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra"):
            log_entry["extra"] = record.extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure root logging for the process.

    Args:
        level: Logging level name (default: INFO)
        json_format: Use StructuredFormatter instead of the text format
        log_file: Optional path to a log file in addition to stdout

    Returns:
        The configured root logger.
    """
    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger()


def log_event(
    logger: logging.Logger,
    event: str,
    extra: Optional[Dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    """
    Log a named pipeline event with structured context.

    The context is attached as record.extra so StructuredFormatter emits it
    as a JSON object; the text format shows only the message.

    Args:
        logger: Logger instance to use
        event: Name of the event (e.g., "plan_created", "completion_failed")
        extra: Additional context to include in the log
        level: Log level for the record
    """
    record = logger.makeRecord(
        logger.name,
        level,
        "",
        0,
        f"Event: {event}",
        args=(),
        exc_info=None,
    )
    record.extra = {"event": event, **(extra or {})}

    logger.handle(record)
