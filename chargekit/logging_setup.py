"""
Structured JSON logging for chargekit

Emits one JSON object per record, suitable for log aggregation.
"""

import logging
import sys
import json
from typing import Any, Dict

EXTRA_FIELDS = ("request_id", "endpoint", "method", "path", "status", "latency")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO, stream=None) -> logging.Logger:
    """
    Route the ``chargekit`` logger tree to a JSON handler.

    Args:
        level: Logging level (default: logging.INFO)
        stream: Output stream (default: sys.stdout)

    Returns:
        The configured ``chargekit`` logger

    Example:
        >>> setup_structured_logger(logging.DEBUG)
        >>> logging.getLogger("chargekit").info("Charge created", extra={"request_id": "req_123"})
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    sdk_logger = logging.getLogger("chargekit")
    sdk_logger.setLevel(level)
    sdk_logger.handlers = [handler]
    sdk_logger.propagate = False
    return sdk_logger
