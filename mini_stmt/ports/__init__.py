"""Public port exports for concrete adapter implementations."""

from .db_api import (
    DbApiConnection,
    DbApiStatement,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    connect_from_config,
    connection_factory,
)

__all__ = [
    "DbApiConnection",
    "DbApiStatement",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "connect_from_config",
    "connection_factory",
]
