"""MySQL access through a pooled SQLAlchemy engine."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import NullPool

CONN_MAX_LIFETIME = 4 * 3600
CONNECT_TIMEOUT = 10

_DRIVER = "mysql+pymysql"
_STARTED = "commonkit_query_started"
_LOG_LEVELS = {
    "debug": logging.INFO,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class MySQLConfig:
    """Connection settings; ``address`` is host:port, ``slow_threshold`` in seconds."""

    username: str = ""
    password: str = ""
    address: str = ""
    database_name: str = ""
    max_open_conns: int = 0
    max_idle_conns: int = 0
    log_mode: str = ""
    logger: logging.Logger | None = None
    slow_threshold: float | timedelta = 0.0


def _host_port(address: str) -> tuple[str | None, int | None]:
    host, sep, port = address.rpartition(":")
    if not sep:
        return address or None, None
    try:
        return host or None, int(port)
    except ValueError as exc:
        raise ValueError(f"[mysql]invalid address {address!r}") from exc


def build_dsn(cfg: MySQLConfig) -> str:
    """Return the SQLAlchemy URL for ``cfg`` with a utf8 connection charset."""
    host, port = _host_port(cfg.address)
    url = URL.create(
        _DRIVER,
        username=cfg.username or None,
        password=cfg.password or None,
        host=host,
        port=port,
        database=cfg.database_name or None,
        query={"charset": "utf8"},
    )
    return url.render_as_string(hide_password=False)


def _pool_options(cfg: MySQLConfig) -> dict[str, Any]:
    if cfg.max_idle_conns <= 0:
        return {"poolclass": NullPool}
    if cfg.max_open_conns > 0:
        size = min(cfg.max_idle_conns, cfg.max_open_conns)
        return {"pool_size": size, "max_overflow": cfg.max_open_conns - size}
    return {"pool_size": cfg.max_idle_conns, "max_overflow": -1}


def _seconds(value: float | timedelta) -> float:
    return value.total_seconds() if isinstance(value, timedelta) else float(value)


def _install_logging(engine: Engine, cfg: MySQLConfig) -> None:
    logger = cfg.logger or logging.getLogger(__name__)
    level = _LOG_LEVELS.get(cfg.log_mode, logging.INFO)
    threshold = _seconds(cfg.slow_threshold)

    @event.listens_for(engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault(_STARTED, []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):
        stack = conn.info.get(_STARTED)
        if not stack:
            return
        elapsed = time.perf_counter() - stack.pop()
        rows = cursor.rowcount
        if threshold and elapsed > threshold and level <= logging.WARNING:
            logger.warning(
                "SLOW SQL >= %.3fs [%.3fms] [rows:%d] %s", threshold, elapsed * 1000, rows, statement
            )
        elif level <= logging.INFO:
            logger.info("[%.3fms] [rows:%d] %s", elapsed * 1000, rows, statement)

    @event.listens_for(engine, "handle_error")
    def _failed(context):
        connection = context.connection
        if connection is not None:
            stack = connection.info.get(_STARTED)
            if stack:
                stack.pop()
        if level <= logging.ERROR:
            logger.error("%s %s", context.original_exception, context.statement or "")


class MySQL:
    """A connection-checked engine with pooling and query logging."""

    def __init__(self, cfg: MySQLConfig | None) -> None:
        if cfg is None:
            raise ValueError("[mysql]config is nil")
        self.cfg = cfg
        self._engine = create_engine(
            build_dsn(cfg),
            pool_recycle=CONN_MAX_LIFETIME,
            connect_args={"connect_timeout": CONNECT_TIMEOUT},
            **_pool_options(cfg),
        )
        _install_logging(self._engine, cfg)
        try:
            with self._engine.connect():
                pass
        except Exception:
            self._engine.dispose()
            raise

    def get_client(self) -> Engine:
        return self._engine

    def close(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()