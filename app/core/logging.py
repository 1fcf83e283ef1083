"""
app/core/logging.py

Purpose: Logging configuration

- JSON records in production, coloured one-liners in development
- Phone numbers are masked in JSON output
- Context tracking (phone, client_ip, service_id) through LogContext
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Optional

from app.core.config import settings

APP_LOGGER_NAME = "servipro"

# Record attributes copied into JSON output when present
CONTEXT_FIELDS = ("phone", "client_ip", "service_id", "method", "url", "client", "process_time")

NOISY_LOGGERS = ("httpx", "motor", "pymongo", "uvicorn.access")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET_COLOR = "\033[0m"


def mask_phone(phone: Optional[str]) -> Optional[str]:
    """
    Keeps the first three and last two characters: +34600000000 -> +34*******00
    """
    if not phone or len(phone) <= 5:
        return phone
    return phone[:3] + "*" * (len(phone) - 5) + phone[-2:]


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record, for log shipping in production.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = mask_phone(value) if field == "phone" else value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development environment.
    """

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET_COLOR)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        name = record.name.replace(f"{APP_LOGGER_NAME}.", "", 1)

        line = f"{color}[{timestamp}] {record.levelname:<8}{RESET_COLOR} {name}: {record.getMessage()}"

        context = [
            f"{label}={getattr(record, field)}"
            for field, label in (("phone", "phone"), ("client_ip", "ip"), ("service_id", "service"))
            if getattr(record, field, None) is not None
        ]
        if context:
            line += f" [{', '.join(context)}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> logging.Logger:
    """
    Configures the root logger once for the process.

    Args:
        level: Overrides LOG_LEVEL (scripts pass "INFO")
        json_format: Overrides the environment default (JSON only in production)
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    if json_format is None:
        json_format = settings.is_production

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_format else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}, json={json_format}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under the application logger."""
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


class LogContext:
    """
    Attaches attributes to every record created inside the block.

    Usage:
        with LogContext(phone="+34600000000"):
            logger.info("Verification code issued")

    Do not pass the same keys through `extra=` inside the block.
    """

    def __init__(self, **context):
        self.context = context
        self._previous_factory = None

    def __enter__(self):
        self._previous_factory = logging.getLogRecordFactory()
        previous, context = self._previous_factory, self.context

        def record_factory(*args, **kwargs):
            record = previous(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self._previous_factory)
