"""Log output for the ``workflow`` logger.

The package stays silent until the host configures logging: a
``NullHandler`` sits on the package logger and records propagate to
whatever the application installed. ``configure_logging`` is the opt-in
for hosts that want the adapters' structured records as JSON lines.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from workflow.core.config import get_config

LOGGER_NAME = "workflow"

_PAYLOAD_FIELDS = (
    "event",
    "subject_type",
    "subject_id",
    "transition_event",
    "from_state",
    "to_state",
    "reason",
)


class JsonFormatter(logging.Formatter):
    """Render a workflow record as one JSON object per line.

    Only the structured fields the adapters attach via ``extra`` are copied;
    fields a record does not carry are left out.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _PAYLOAD_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def install_null_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())


def _json_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if isinstance(handler.formatter, JsonFormatter)]


def configure_logging(stream: IO[str] | None = None) -> list[logging.Handler]:
    """Attach JSON handlers to the ``workflow`` logger once.

    Writes to ``stream`` (stdout by default) and, when ``LOG_FILE`` is set,
    to that file. The root logger is left alone. Later calls return the
    handlers installed by the first one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    installed = _json_handlers(logger)
    if installed:
        return installed

    config = get_config()
    logger.setLevel(config.LOG_LEVEL)
    formatter = JsonFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return handlers
