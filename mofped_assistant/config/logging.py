"""Logging setup for the assistant's API and CLI."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "mofped_assistant"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Chatty third-party loggers held at WARNING unless running at DEBUG
QUIET_LOGGERS = ("urllib3", "httpx", "uvicorn.access")

# Record attributes set by log_exception(extra=...) and copied into JSON lines
RECORD_FIELDS = ("error_code", "intent")


class JSONLineFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger and message.

    Records written by ``log_exception`` also carry ``error_code`` and
    ``intent``, so failures can be filtered by code or by query type.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        for name in RECORD_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """(Re)configure the package logger.

    Logs go to stderr so the CLI's answers on stdout stay clean. Calling this
    again replaces the previous handlers.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_file: Also append to this file.
        json_format: Emit JSON lines instead of text.

    Returns:
        The ``mofped_assistant`` logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = JSONLineFormatter() if json_format else logging.Formatter(
        TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for old in package_logger.handlers[:]:
        package_logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    return package_logger
