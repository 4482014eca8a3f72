"""Logging setup shared by the CLI and the web application."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

_NOISY_LOGGERS = ("httpx", "openai", "uvicorn.access")


class AssistJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every record with an ISO timestamp and the service name."""

    def __init__(self, *args: Any, service: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        if self.service:
            log_record["service"] = self.service
        for key in list(log_record):
            if "api_key" in key.lower():
                log_record[key] = "***REDACTED***"


def setup_logging(level: str = "INFO", *, json_format: bool = True, service: Optional[str] = None) -> None:
    """Configure the root logger with a single stdout handler."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(
            AssistJsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s", service=service)
        )
    else:
        prefix = f"[{service}] " if service else ""
        handler.setFormatter(logging.Formatter(f"%(asctime)s %(levelname)s {prefix}[%(name)s] %(message)s"))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
