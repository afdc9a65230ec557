import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict


def new_correlation_id() -> str:
    return str(uuid.uuid4())


_RESERVED = {
    "args", "asctime", "created", "exc_info", "exc_text",
    "filename", "funcName", "levelname", "levelno", "lineno",
    "module", "msecs", "message", "msg", "name", "pathname",
    "process", "processName", "relativeCreated", "stack_info",
    "thread", "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, event plus any `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RESERVED or k in payload:
                continue
            payload[k] = v

        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str = "escrow_api_client", level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    # stdout belongs to the harness output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger
