import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from twangpao.core.config import get_settings

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Fields of a bare LogRecord; anything else arrived through ``extra``
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "correlation_id",
}

CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(correlation_id)s] - %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only speak up for warnings
QUIET_LOGGERS = ("uvicorn.access", "httpx")


class StructuredLogFormatter(logging.Formatter):
    """
    Render each record as one JSON line.

    Keys ``extra={...}`` passed to the logging call become top-level fields,
    next to the request correlation id when one is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "correlation_id", "") or correlation_id.get()
        if request_id:
            entry["correlation_id"] = request_id

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info)
            }

        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )
        return json.dumps(entry, default=str)


class ContextFilter(logging.Filter):
    """Stamp records with the correlation id of the running request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get()
        return True


def configure_logging() -> None:
    """
    Route all logging to stdout.

    ``ENABLE_STRUCTURED_LOGGING`` picks JSON lines over the console format.
    Calling it again replaces the previous handlers rather than stacking them.
    """
    settings = get_settings()

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    stream = logging.StreamHandler(sys.stdout)
    stream.addFilter(ContextFilter())
    if settings.ENABLE_STRUCTURED_LOGGING:
        stream.setFormatter(StructuredLogFormatter())
    else:
        stream.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    root.addHandler(stream)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger whose records carry the correlation id."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, ContextFilter) for f in logger.filters):
        logger.addFilter(ContextFilter())
    return logger


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """Bind ``corr_id`` (or a fresh uuid4) to the current context and return it."""
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id
