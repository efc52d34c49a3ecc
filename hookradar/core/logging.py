# hookradar/core/logging.py
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from hookradar import __version__
from hookradar.core.config import LoggingSettings
from hookradar.core.constants import APP_NAME, LogFormat

LOGGER_NAME = "hookradar"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class CustomJsonFormatter(JsonFormatter):
    """
    JSON lines for the hook-radar log file.

    Every record names the app and version, since several agent hooks may
    share one log file. Records logged with exc_info (strategy crashes) also
    carry the exception class as `error_type`.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["app"] = APP_NAME
        log_record["version"] = __version__

        if record.exc_info and record.exc_info[0] is not None:
            log_record["error_type"] = record.exc_info[0].__name__


class KeyValueFormatter(logging.Formatter):
    """Plain text formatter that appends `extra` fields as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        return line


def _resolve_level(level: str) -> int:
    if level.lower() == "warn":
        return logging.WARNING
    return logging.getLevelName(level.upper())


def _open_log_handler(log_file: str) -> logging.Handler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def setup_logging(settings: LoggingSettings) -> logging.Logger:
    """
    Configure the hookradar logger.

    stdout carries the hook response, so logs only ever go to the configured
    log file. Without one, records are dropped.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(settings.level))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not settings.log_file:
        logger.addHandler(logging.NullHandler())
        return logger

    try:
        handler = _open_log_handler(settings.log_file)
    except OSError as e:
        logger.addHandler(logging.NullHandler())
        print(f"Failed to open log file {settings.log_file}: {e}", file=sys.stderr)
        return logger

    if settings.format == LogFormat.JSON:
        handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s"))
    else:
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)

    return logger
