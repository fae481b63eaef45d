"""
Structured logging setup for all modules.

Every record is one JSON object. The flow session bound to the current
context (bind_session) contributes its id and its state at the time the
record is formatted, so lines logged after a transition carry the new state.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

from shared.config import settings

# Either a bare session id or a bound session (any object with session_id and state)
session_id_context: ContextVar[Optional[UUID]] = ContextVar("session_id", default=None)
session_context: ContextVar[Optional[Any]] = ContextVar("flow_session", default=None)

# Standard LogRecord attributes to exclude from extra fields
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "getMessage", "taskName"
}


def _json_value(value: Any) -> Any:
    """Render an extra field: enums by value, costs as exact strings."""
    if isinstance(value, (bool, int, float, str, type(None))):
        return value
    if isinstance(value, Enum):
        return _json_value(value.value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return str(value)


class JSONFormatter(logging.Formatter):
    """JSON formatter with flow session context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        session_id = get_session_id()
        if session_id:
            log_data["session_id"] = str(session_id)
        session = session_context.get()
        if session is not None:
            log_data["flow_state"] = _json_value(session.state)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                log_data[key] = _json_value(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (e.g., "character_flow")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def bind_session(session: Optional[Any]) -> None:
    """
    Bind a flow session to the current context.

    Records formatted while it is bound carry its session_id and flow_state.
    """
    session_context.set(session)
    session_id_context.set(session.session_id if session is not None else None)


def set_session_id(session_id: Optional[UUID]) -> None:
    """Set only the session id (no flow state), e.g. before the session is resolved."""
    session_context.set(None)
    session_id_context.set(session_id)


def get_session_id() -> Optional[UUID]:
    """Get current session_id from context."""
    return session_id_context.get()
