"""
Structured logging for the davinci client.
Emits one JSON object per record, extra fields included.
"""

import json
import logging
import sys
from datetime import datetime, timezone

LOGGER_NAME = "davinci"

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)
logger.addHandler(logging.NullHandler())

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as JSON lines with their ``extra`` fields at top level."""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED or key.startswith("_"):
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Handler:
    """Attach a JSON handler to the package logger.

    Library code only emits records; applications opt in to output by calling
    this once. Calling it again replaces the previous handler.
    """
    for existing in list(logger.handlers):
        if getattr(existing, "_davinci_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler._davinci_handler = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def get_logger(component: str = "client"):
    return ComponentLogger(component)


class ComponentLogger:
    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger(LOGGER_NAME)

    def _extra(self, kwargs):
        extra = {"component": self.component}
        extra.update(kwargs)
        return extra

    def info(self, msg, **kwargs):
        self.logger.info(msg, extra=self._extra(kwargs))

    def error(self, msg, **kwargs):
        self.logger.error(msg, extra=self._extra(kwargs))
