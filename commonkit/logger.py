"""Process-wide leveled logger with console output and a rotating log file."""

from __future__ import annotations

import gzip
import json
import logging
import os
import re
import shutil
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterable

DEBUG = logging.DEBUG
INFO = logging.INFO
WARN = logging.WARNING
ERROR = logging.ERROR
DPANIC = 42
PANIC = 45
FATAL = logging.CRITICAL

_LEVEL_NAMES = {DEBUG: "DEBUG", INFO: "INFO", WARN: "WARN", ERROR: "ERROR",
                DPANIC: "DPANIC", PANIC: "PANIC", FATAL: "FATAL"}
_LEVELS = {"debug": DEBUG, "info": INFO, "": INFO, "warn": WARN, "error": ERROR,
           "dpanic": DPANIC, "panic": PANIC, "fatal": FATAL}
_COLORS = {DEBUG: 35, INFO: 34, WARN: 33}
_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_MB = 1024 * 1024

_LOGGER_METHODS = (
    "debug", "debugf", "debugw", "info", "infof", "infow",
    "warn", "warnf", "warnw", "error", "errorf", "errorw",
    "fatal", "fatalf", "fatalw", "panic", "panicf", "panicw",
    "sync", "with_fields",
)


@dataclass
class RotationConfig:
    """Log file rotation settings; zero values take the defaults."""

    max_size: int = 0
    max_age: int = 0
    max_backups: int = 0
    local_time: bool = False
    compress: bool = False


@dataclass
class LogConfig:
    log_file_name: str = ""
    log_level: str = ""
    log: RotationConfig | None = None

    def _pre_check(self) -> None:
        if not self.log_file_name:
            self.log_file_name = "default"
        if not self.log_level:
            self.log_level = "debug"
        if self.log is None:
            self.log = RotationConfig(max_size=100, max_age=7, max_backups=10, local_time=True)
        else:
            self.log.max_size = self.log.max_size or 100
            self.log.max_age = self.log.max_age or 7
            self.log.max_backups = self.log.max_backups or 10


@dataclass
class MultiWriter:
    """Writes every chunk to each writer; returns the last writer's result."""

    writers: list[Any] = field(default_factory=list)

    def write(self, data: Any) -> int:
        written = 0
        for writer in self.writers:
            written = writer.write(data)
        return written


def string_level(level: str) -> int:
    """Map a level name to a level; unknown names give debug."""
    return _LEVELS.get(level.lower(), DEBUG)


def _go_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return str(value)


def _sprint(args: tuple[Any, ...]) -> str:
    parts = []
    for index, arg in enumerate(args):
        if index and not isinstance(arg, str) and not isinstance(args[index - 1], str):
            parts.append(" ")
        parts.append(_go_str(arg))
    return "".join(parts)


_VERB = re.compile(r"%([-+# 0]*)(\d+)?(?:\.(\d+))?([a-zA-Z%])")


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    remaining = list(args)

    def render(match: re.Match[str]) -> str:
        flags, width, precision, verb = match.groups()
        if verb == "%":
            return "%"
        if not remaining:
            return f"%!{verb}(MISSING)"
        arg = remaining.pop(0)
        if verb == "d" and isinstance(arg, int):
            text = str(arg)
        elif verb in "feg" and isinstance(arg, (int, float)):
            text = format(arg, f".{precision or 6}{verb}")
        elif verb == "q":
            text = json.dumps(_go_str(arg), ensure_ascii=False)
        elif verb in "xX" and isinstance(arg, (int, str, bytes)):
            raw = arg.encode() if isinstance(arg, str) else arg
            text = format(arg, verb) if isinstance(arg, int) else raw.hex()
            text = text.upper() if verb == "X" else text
        else:
            text = _go_str(arg)
        if width:
            text = text.ljust(int(width)) if "-" in flags else text.rjust(int(width))
        return text

    text = _VERB.sub(render, fmt)
    if remaining:
        text += "%!(EXTRA " + ", ".join(_go_str(arg) for arg in remaining) + ")"
    return text


def _pairs(args: tuple[Any, ...]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    items = list(args)
    while items:
        key = items.pop(0)
        if not items:
            fields["!BADKEY"] = key
            break
        fields[_go_str(key)] = items.pop(0)
    return fields


class _ConsoleFormatter(logging.Formatter):
    def __init__(self, colored: bool) -> None:
        super().__init__()
        self._colored = colored

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created)
        text = f"{stamp.strftime(_TIME_LAYOUT)}.{int(record.msecs):03d}"
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        if self._colored:
            level = f"\x1b[{_COLORS.get(record.levelno, 31)}m{level}\x1b[0m"
        line = f"{text}\t{level}\t{record.getMessage()}"
        fields = getattr(record, "fields", None)
        if fields:
            line += "\t" + json.dumps(fields, default=str, ensure_ascii=False)
        if record.stack_info:
            line += "\n" + self.formatStack(record.stack_info)
        return line


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {"level": _LEVEL_NAMES.get(record.levelno, record.levelname).lower(),
                 "ts": record.created, "msg": record.getMessage()}
        entry.update(getattr(record, "fields", None) or {})
        if record.stack_info:
            entry["stacktrace"] = record.stack_info
        return json.dumps(entry, default=str, ensure_ascii=False)


class _LevelRange(logging.Filter):
    def __init__(self, low: int, high: int | None = None) -> None:
        super().__init__()
        self._low, self._high = low, high

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self._low and (self._high is None or record.levelno < self._high)


class _RotatingFileHook(RotatingFileHandler):
    """Size-based rotation with timestamped backups, pruning by count and age."""

    def __init__(self, filename: str, rotation: RotationConfig) -> None:
        Path(filename).parent.mkdir(parents=True, exist_ok=True)
        super().__init__(filename, maxBytes=rotation.max_size * _MB, backupCount=0,
                         encoding="utf-8")
        self.rotation = rotation

    def _backups(self) -> list[Path]:
        path = Path(self.baseFilename)
        return sorted(path.parent.glob(f"{path.stem}-*{path.suffix}*"),
                      key=lambda item: item.stat().st_mtime, reverse=True)

    def doRollover(self) -> None:
        if self.stream:
            self.stream.close()
            self.stream = None  # type: ignore[assignment]
        path = Path(self.baseFilename)
        now = datetime.now() if self.rotation.local_time else datetime.now(timezone.utc)
        stamp = now.strftime("%Y-%m-%dT%H-%M-%S.") + f"{now.microsecond // 1000:03d}"
        backup = path.with_name(f"{path.stem}-{stamp}{path.suffix}")
        if path.exists():
            os.replace(path, backup)
            if self.rotation.compress:
                with backup.open("rb") as src, gzip.open(f"{backup}.gz", "wb") as dst:
                    shutil.copyfileobj(src, dst)
                backup.unlink()
        cutoff = time.time() - self.rotation.max_age * 86400
        for index, old in enumerate(self._backups()):
            too_many = self.rotation.max_backups and index >= self.rotation.max_backups
            too_old = self.rotation.max_age and old.stat().st_mtime < cutoff
            if too_many or too_old:
                old.unlink(missing_ok=True)
        self.stream = self._open()


class _SugaredLogger:
    """Leveled logging with print-style, format-style and key/value variants."""

    def __init__(self, logger: logging.Logger, fields: dict[str, Any] | None = None) -> None:
        self._logger = logger
        self._fields = dict(fields or {})

    def _log(self, level: int, message: str, fields: dict[str, Any] | None = None) -> None:
        if self._logger.isEnabledFor(level):
            merged = {**self._fields, **(fields or {})}
            self._logger.log(level, "%s", message, extra={"fields": merged},
                             stack_info=level >= ERROR, stacklevel=4)
        if level == PANIC:
            raise RuntimeError(message)
        if level == FATAL:
            self.sync()
            raise SystemExit(1)

    def debug(self, *args: Any) -> None: self._log(DEBUG, _sprint(args))
    def debugf(self, fmt: str, *args: Any) -> None: self._log(DEBUG, _sprintf(fmt, args))
    def debugw(self, msg: str, *args: Any) -> None: self._log(DEBUG, msg, _pairs(args))
    def info(self, *args: Any) -> None: self._log(INFO, _sprint(args))
    def infof(self, fmt: str, *args: Any) -> None: self._log(INFO, _sprintf(fmt, args))
    def infow(self, msg: str, *args: Any) -> None: self._log(INFO, msg, _pairs(args))
    def warn(self, *args: Any) -> None: self._log(WARN, _sprint(args))
    def warnf(self, fmt: str, *args: Any) -> None: self._log(WARN, _sprintf(fmt, args))
    def warnw(self, msg: str, *args: Any) -> None: self._log(WARN, msg, _pairs(args))
    def error(self, *args: Any) -> None: self._log(ERROR, _sprint(args))
    def errorf(self, fmt: str, *args: Any) -> None: self._log(ERROR, _sprintf(fmt, args))
    def errorw(self, msg: str, *args: Any) -> None: self._log(ERROR, msg, _pairs(args))
    def fatal(self, *args: Any) -> None: self._log(FATAL, _sprint(args))
    def fatalf(self, fmt: str, *args: Any) -> None: self._log(FATAL, _sprintf(fmt, args))
    def fatalw(self, msg: str, *args: Any) -> None: self._log(FATAL, msg, _pairs(args))
    def panic(self, *args: Any) -> None: self._log(PANIC, _sprint(args))
    def panicf(self, fmt: str, *args: Any) -> None: self._log(PANIC, _sprintf(fmt, args))
    def panicw(self, msg: str, *args: Any) -> None: self._log(PANIC, msg, _pairs(args))

    def sync(self) -> None:
        for handler in self._logger.handlers:
            handler.flush()

    def with_fields(self, *args: Any) -> "_SugaredLogger":
        return _SugaredLogger(self._logger, {**self._fields, **_pairs(args)})


def _replace_handlers(logger: logging.Logger, handlers: Iterable[logging.Handler]) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)


def _default_logger() -> _SugaredLogger:
    base = logging.getLogger("commonkit.default")
    base.setLevel(INFO)
    base.propagate = False
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    _replace_handlers(base, [handler])
    return _SugaredLogger(base)


_logger: Any = _default_logger()
_log_file_hook: _RotatingFileHook | None = None


def new_logger(cfg: LogConfig) -> None:
    """Configure the process logger: file at logs/<name>.log, stdout and stderr."""
    global _logger, _log_file_hook
    cfg._pre_check()
    assert cfg.log is not None
    level = string_level(cfg.log_level)

    hook = _RotatingFileHook(os.path.join("logs", f"{cfg.log_file_name}.log"), cfg.log)
    hook.setFormatter(_ConsoleFormatter(colored=False))
    hook.addFilter(_LevelRange(level))

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(_ConsoleFormatter(colored=True))
    stdout.addFilter(_LevelRange(level, ERROR))

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setFormatter(_ConsoleFormatter(colored=True))
    stderr.addFilter(_LevelRange(max(level, ERROR)))

    base = logging.getLogger("commonkit.app")
    base.setLevel(level)
    base.propagate = False
    _replace_handlers(base, [hook, stdout, stderr])
    _log_file_hook = hook
    _logger = _SugaredLogger(base)


def get_logger() -> Any:
    return _logger


def set_logger(logger: Any) -> None:
    """Replace the process logger; it must provide every leveled method."""
    global _logger
    missing = [name for name in _LOGGER_METHODS if not callable(getattr(logger, name, None))]
    if missing:
        raise TypeError(f"logger lacks methods: {', '.join(missing)}")
    _logger = logger


def get_log_file_hook() -> _RotatingFileHook | None:
    return _log_file_hook


def debug(*args: Any) -> None: _logger.debug(*args)
def debugf(fmt: str, *args: Any) -> None: _logger.debugf(fmt, *args)
def debugw(msg: str, *args: Any) -> None: _logger.debugw(msg, *args)
def info(*args: Any) -> None: _logger.info(*args)
def infof(fmt: str, *args: Any) -> None: _logger.infof(fmt, *args)
def infow(msg: str, *args: Any) -> None: _logger.infow(msg, *args)
def warn(*args: Any) -> None: _logger.warn(*args)
def warnf(fmt: str, *args: Any) -> None: _logger.warnf(fmt, *args)
def warnw(msg: str, *args: Any) -> None: _logger.warnw(msg, *args)
def error(*args: Any) -> None: _logger.error(*args)
def errorf(fmt: str, *args: Any) -> None: _logger.errorf(fmt, *args)
def errorw(msg: str, *args: Any) -> None: _logger.errorw(msg, *args)
def fatal(*args: Any) -> None: _logger.fatal(*args)
def fatalf(fmt: str, *args: Any) -> None: _logger.fatalf(fmt, *args)
def fatalw(msg: str, *args: Any) -> None: _logger.fatalw(msg, *args)
def panic(*args: Any) -> None: _logger.panic(*args)
def panicf(fmt: str, *args: Any) -> None: _logger.panicf(fmt, *args)
def panicw(msg: str, *args: Any) -> None: _logger.panicw(msg, *args)


def sync() -> None:
    """Flush buffered output of the process logger and its log file."""
    _logger.sync()
    if _log_file_hook is not None:
        _log_file_hook.flush()


def with_fields(*args: Any) -> Any:
    return _logger.with_fields(*args)