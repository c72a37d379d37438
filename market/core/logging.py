"""
Structured JSON logging with request_id, user_id, product_id when applicable.
"""
from __future__ import annotations

import json
import logging
import time
from contextvars import ContextVar
from typing import Optional

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# LogRecord extras copied into the JSON line when present
_EXTRA_FIELDS = ("user_id", "product_id", "status_code", "path")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S.000Z", time.gmtime(record.created)),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if request_id_ctx.get():
            log["request_id"] = request_id_ctx.get()
        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log[field] = value if isinstance(value, (int, float)) else str(value)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger
