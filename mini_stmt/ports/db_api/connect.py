"""Driver connection factories built from `ConnectionConfig`."""

from __future__ import annotations

import sqlite3
from functools import partial
from typing import Any, Callable, Tuple

import pymysql

from ...core.config import ConnectionConfig
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect

ConnectFactory = Callable[[], Any]


def _connect_postgres(config: ConnectionConfig) -> Any:
    import psycopg

    kwargs: dict[str, Any] = {
        "host": config.host or None,
        "user": config.username or None,
        "password": config.password or None,
        "dbname": config.name or None,
    }
    if config.port is not None:
        kwargs["port"] = config.port
    return psycopg.connect(**{k: v for k, v in kwargs.items() if v is not None})


def connection_factory(config: ConnectionConfig) -> Tuple[ConnectFactory, Dialect]:
    """Return a zero-argument connect callable and the matching dialect."""

    if config.driver == "sqlite":
        return partial(sqlite3.connect, config.name or ":memory:"), SQLiteDialect()
    if config.driver == "postgres":
        return partial(_connect_postgres, config), PostgresDialect()
    return (
        partial(
            pymysql.connect,
            host=config.host or "localhost",
            user=config.username,
            password=config.password,
            database=config.name or None,
            port=config.port or 3306,
            charset="utf8mb4",
        ),
        MySQLDialect(),
    )


def connect_from_config(config: ConnectionConfig) -> Tuple[Any, Dialect]:
    """Open the driver connection described by `config`."""

    connect, dialect = connection_factory(config)
    return connect(), dialect
