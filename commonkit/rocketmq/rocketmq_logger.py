"""Adapter that routes RocketMQ client log calls to a standard logger."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any, Mapping

COMPONENT = "[ROCKETMQ]"

_LEVELS = {"debug": logging.DEBUG, "warn": logging.WARNING, "error": logging.ERROR}
_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}
_BARE = re.compile(r"[A-Za-z0-9\-._/@^+]+")


def _quote(value: Any) -> str:
    text = value if isinstance(value, str) else str(value)
    if _BARE.fullmatch(text):
        return text
    return json.dumps(text, ensure_ascii=False)


class _FieldsFormatter(logging.Formatter):
    """Renders records as key=value text with their fields sorted by key."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")
        level = _LEVEL_NAMES.get(record.levelno, record.levelname.lower())
        parts = [f"time={_quote(stamp)}", f"level={level}", f"msg={_quote(record.getMessage())}"]
        fields = getattr(record, "fields", None) or {}
        parts.extend(f"{key}={_quote(fields[key])}" for key in sorted(fields))
        return " ".join(parts)


class LoggerWrap:
    """Logs messages with their fields, tagged with the component name."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def _log(self, level: int, msg: str, fields: Mapping[str, Any] | None) -> bool:
        if not msg and not fields:
            return False
        merged = {"component": COMPONENT, **dict(fields or {})}
        self.logger.log(level, "%s", msg, extra={"fields": merged})
        return True

    def debug(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.ERROR, msg, fields)

    def fatal(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        """Log at critical level and exit with status 1."""
        if self._log(logging.CRITICAL, msg, fields):
            for handler in self.logger.handlers:
                handler.flush()
            raise SystemExit(1)

    def level(self, level: str) -> None:
        """Set the level from a name: debug, warn, error; anything else is info."""
        self.logger.setLevel(_LEVELS.get(level.lower(), logging.INFO))

    def output_path(self, path: str) -> None:
        """Send all further output to ``path``, appending and creating it if needed."""
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        handler.setFormatter(_FieldsFormatter())
        for old in list(self.logger.handlers):
            self.logger.removeHandler(old)
        self.logger.addHandler(handler)