"""DB-API adapter and dialect exports."""

from .connect import connect_from_config, connection_factory
from .connection import DbApiConnection, DbApiStatement
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, count_placeholders

__all__ = [
    "DbApiConnection",
    "DbApiStatement",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "connect_from_config",
    "connection_factory",
    "count_placeholders",
]
