"""
Logging utilities for the resolver Lambda.

Provides structured JSON logging with correlation IDs for tracing requests
through CloudWatch.
"""

import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class StructuredLogger:
    """
    JSON logger with correlation ID support.

    Example:
        logger = get_logger(__name__)
        logger.info("Product updated", product_id="abc-123", low_stock=True)
    """

    def __init__(self, name: str, correlation_id: Optional[str] = None) -> None:
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
        self.correlation_id = correlation_id or str(uuid.uuid4())

    def _enabled(self, level: str) -> bool:
        threshold = _LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), 20)
        return _LEVELS[level] >= threshold

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        """Emit one JSON log line."""
        if not self._enabled(level):
            return

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "logger": self.name,
            "message": message,
            "correlationId": self.correlation_id,
            **kwargs,
        }
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        print(json.dumps(log_entry, default=str))

    def set_correlation_id(self, correlation_id: str) -> None:
        """Attach the current request's correlation ID to subsequent lines."""
        self.correlation_id = correlation_id

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Return the shared StructuredLogger for a module name."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def bind_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID on every logger created so far."""
    for logger in _loggers.values():
        logger.set_correlation_id(correlation_id)


def get_correlation_id(event: Dict[str, Any]) -> str:
    """
    Extract or generate correlation ID from an AppSync Lambda event.

    Checks, in order:
    1. event['request']['headers']['x-amzn-requestid'] (AppSync)
    2. event['requestContext']['requestId']
    3. event['request']['headers']['x-correlation-id']
    4. Generates new UUID if not found
    """
    headers = (event.get("request") or {}).get("headers") or {}
    if "x-amzn-requestid" in headers:
        return str(headers["x-amzn-requestid"])

    request_context = event.get("requestContext") or {}
    if "requestId" in request_context:
        return str(request_context["requestId"])

    if "x-correlation-id" in headers:
        return str(headers["x-correlation-id"])

    return str(uuid.uuid4())
