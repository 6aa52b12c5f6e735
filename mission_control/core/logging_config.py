"""Process-wide logging: JSON lines on stderr plus a ring buffer for /api/logs."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

from mission_control.core.config import settings

_CONFIGURED = False
_LOG_BUFFER: deque[dict[str, str]] = deque(maxlen=settings.log_buffer_size)

# Client libraries that log every request at INFO/DEBUG
_NOISY_LOGGERS = ("google.auth", "google.api_core", "urllib3", "grpc")


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


class _BufferHandler(logging.Handler):
    """Keeps the most recent records, newest first."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            _LOG_BUFFER.appendleft(
                {
                    "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                    "level": record.levelname,
                    "name": record.name,
                    "message": record.getMessage(),
                }
            )
        except Exception:
            self.handleError(record)


def _formatter() -> logging.Formatter:
    if settings.log_json:
        return jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(service)s")
    return logging.Formatter("%(asctime)s %(levelname)-7s [%(service)s] %(name)s: %(message)s")


def setup_logging(level: Optional[str] = None, service_name: Optional[str] = None) -> None:
    """Install the stream and buffer handlers on the root logger once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_formatter())
    handler.addFilter(_ServiceNameFilter(service_name or settings.service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.addHandler(_BufferHandler())
    root.setLevel((level or settings.log_level).upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.captureWarnings(True)
    _CONFIGURED = True


def get_log_buffer(limit: int = 100, min_level: Optional[str] = None) -> list[dict[str, str]]:
    """Most recent buffered records, optionally only those at ``min_level`` or above."""
    entries = list(_LOG_BUFFER)
    if min_level:
        threshold = logging.getLevelName(min_level.upper())
        if isinstance(threshold, int):
            entries = [entry for entry in entries if logging.getLevelName(entry["level"]) >= threshold]
    return entries[:limit]


__all__ = ["setup_logging", "get_log_buffer"]
