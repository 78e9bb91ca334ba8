"""Structured JSON logging for the automation server.

Every line goes to stdout and to a per-session file under ``LOG_DIR``.
Webhook handlers attach correlation fields with ``extra=log_context(...)``
so one order or tracking number can be followed across modules.
"""

import json
import logging
import os
import sys
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

# Timestamps are written in the operations team's local time
LOG_TZ = ZoneInfo(os.getenv("LOG_TIMEZONE", "America/New_York"))

# Fields copied from `extra=` into the JSON line when present
CORRELATION_FIELDS = ("endpoint", "record_id", "tracking_number", "carrier_status")


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def __init__(self, tz: ZoneInfo = LOG_TZ):
        super().__init__()
        self.tz = tz

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, self.tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CORRELATION_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(entry, default=str)


def log_context(**fields: Any) -> Dict[str, Any]:
    """
    Correlation fields for ``extra=``, without the unset ones.

    Example:
        logger.info("Order updated", extra=log_context(record_id="rec1"))
    """
    return {key: value for key, value in fields.items() if value is not None}


def session_log_path(log_dir: Path, now: Optional[datetime] = None) -> Path:
    """automation_<date>_<session>.log, so restarts on one day get separate files."""
    now = now or datetime.now(LOG_TZ)
    session = uuid.uuid4().hex[:8]
    return log_dir / f"automation_{now:%Y-%m-%d}_{session}.log"


def configure_logging(log_dir: Optional[str] = None, level: Optional[str] = None) -> None:
    """Attach the JSON handlers to the root logger unless it already has handlers."""
    root = logging.getLogger()
    if root.handlers:
        return

    directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    console_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    formatter = JSONFormatter()

    file_handler = logging.FileHandler(session_log_path(directory))
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level, logging.INFO))
    console_handler.setFormatter(formatter)

    root.setLevel(logging.DEBUG)
    root.addHandler(file_handler)
    root.addHandler(console_handler)


configure_logging()


def setup_logger(name: str) -> logging.Logger:
    """Get logger for a module."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
