# rentledger/logging_config.py
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import settings
from .middleware.request_id import get_request_id

# structured extras copied onto the JSON line when present on the record
_EXTRA_KEYS = (
    "lease_id",
    "entry_id",
    "ledger_month",
    "fields",
    "tenant_paid",
    "landlord_paid",
    "method",
    "path",
    "query",
    "status_code",
    "latency_ms",
    "staff_user",
    "error",
)


class JsonFormatter(logging.Formatter):
    """
    Minimal JSON formatter.
    Includes request_id (if present), level, message, logger, timestamp, exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = getattr(record, "request_id", None) or get_request_id()
        if rid:
            payload["request_id"] = rid

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in _EXTRA_KEYS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None) -> None:
    level = (level or settings.log_level or "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers (important for uvicorn reload)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel((settings.sql_log_level or "WARNING").upper())
