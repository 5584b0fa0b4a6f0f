"""Prepared-statement query engine over DB-API connections."""

from .core import (
    AffectedCount,
    Batch,
    ConnectionConfig,
    DatabaseUnavailable,
    Done,
    ErrorKind,
    Failure,
    InsertId,
    QueryFailed,
    QueryTelemetry,
    Rows,
    StatementKind,
    TypeTag,
    classify,
)
from .ports import MySQLDialect, PostgresDialect, SQLiteDialect
from .runner import QueryRunner

__all__ = [
    "AffectedCount",
    "Batch",
    "ConnectionConfig",
    "DatabaseUnavailable",
    "Done",
    "ErrorKind",
    "Failure",
    "InsertId",
    "MySQLDialect",
    "PostgresDialect",
    "QueryFailed",
    "QueryRunner",
    "QueryTelemetry",
    "Rows",
    "SQLiteDialect",
    "StatementKind",
    "TypeTag",
    "classify",
]
