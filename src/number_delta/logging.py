"""JSON-lines logging for number_delta diagnostics."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "number_delta"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object stamped with its creation time."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.strip().upper()]
    except KeyError:
        raise ValueError(f"Unsupported log level: {level}") from None


def configure_logging(
    *,
    log_level: str | int = "WARNING",
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Attach JSON handlers to the package logger and stop propagation.

    The root logger is left alone, so a TAP stream on stdout is never mixed
    with log records.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_number(log_level))
    logger.handlers.clear()
    logger.propagate = False

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = JsonFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
