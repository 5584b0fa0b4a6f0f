"""Query runner facade: lazy connection, query dispatch and catalog helpers."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Callable, List, Optional, Union

from .core.coercion import clean
from .core.config import ConnectionConfig
from .core.errors import DatabaseUnavailable, ErrorKind
from .core.executor import execute, fail
from .core.outcomes import Outcome
from .core.params import parse_descriptor
from .core.statement_kind import StatementKind, classify
from .core.telemetry import QueryTelemetry
from .core.types import QueryParams
from .ports.db_api.connect import connection_factory
from .ports.db_api.connection import DbApiConnection
from .ports.db_api.dialects import Dialect

logger = logging.getLogger(__name__)

_TABLE_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")


class QueryRunner:
    """Prepared-statement wrapper around one lazily opened DB connection.

    Every `query()` overwrites `telemetry`. A runner is not safe to share
    between threads; create one per concurrent unit of work.
    """

    def __init__(
        self,
        connect: Callable[[], Any],
        dialect: Dialect,
        *,
        close_after_query: bool = False,
    ):
        """Create a runner.

        Args:
            connect: Zero-argument callable returning a DB-API connection.
            dialect: Concrete SQL dialect instance.
            close_after_query: Close the connection after every query; the
                next call reconnects.
        """

        self._connect = connect
        self._connection: Optional[DbApiConnection] = None
        self.dialect = dialect
        self.close_after_query = close_after_query
        self.telemetry = QueryTelemetry()

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs: Any) -> QueryRunner:
        connect, dialect = connection_factory(config)
        return cls(connect, dialect, **kwargs)

    @classmethod
    def from_connection(cls, conn: Any, dialect: Dialect) -> QueryRunner:
        """Wrap an already open DB-API connection."""

        return cls(lambda: conn, dialect)

    def connect(self) -> DbApiConnection:
        """Return the open connection, establishing it on first use.

        Raises:
            DatabaseUnavailable: The connection could not be established.
        """

        if self._connection is None or self._connection.closed:
            try:
                conn = self._connect()
            except Exception as exc:
                logger.critical("Unable to connect to database: %s", exc)
                raise DatabaseUnavailable("Unable to connect to database.") from exc
            self._connection = DbApiConnection(conn, self.dialect)
        return self._connection

    def query(
        self,
        sql: str,
        params: QueryParams = (),
        multi_row: bool = False,
    ) -> Outcome:
        """Prepare, bind and execute `sql`.

        Args:
            sql: SQL template with positional placeholders.
            params: Tag string followed by values, e.g. `("is", 7, "a")`; with
                `multi_row`, tag string followed by a list of row groups.
            multi_row: Execute an `INSERT` once per row group.

        Returns:
            `InsertId`, `AffectedCount`, `Rows`, `Done`, `Batch` or `Failure`.
        """

        params = () if params is None else params
        self.telemetry.start(sql, params)

        if not isinstance(sql, str) or not sql.strip():
            return fail(
                self.telemetry,
                ErrorKind.INVALID_REQUEST,
                f"Expects a non-empty SQL string; {type(sql).__name__} given",
            )
        if isinstance(params, (str, bytes)) or not isinstance(params, Sequence):
            return fail(
                self.telemetry,
                ErrorKind.INVALID_REQUEST,
                f"Expects a parameter sequence; {type(params).__name__} given",
            )

        kind = classify(sql)
        descriptor = parse_descriptor(params, multi_row=multi_row and kind is StatementKind.INSERT)
        connection = self.connect()
        try:
            return execute(connection, sql, descriptor, telemetry=self.telemetry)
        finally:
            if self.close_after_query:
                self.close()

    def cleaner(self, data: Any, rich: bool = False) -> Any:
        """Escape `data` for the driver, sanitizing markup first when `rich`."""

        return clean(data, self.connect().escape_string, rich=rich)

    def show_tables(self) -> List[str]:
        """List table names of the connected database."""

        sql, params = self.dialect.list_tables_sql()
        outcome = self.query(sql, params)
        return [_first_value(row) for row in outcome.value or ()]

    def show_columns_from(self, data: Union[str, Sequence[str]]) -> List[Any]:
        """List column names of one table, or of each table in a sequence."""

        if isinstance(data, Sequence) and not isinstance(data, str):
            return [self.show_columns_from(table) for table in data]
        if isinstance(data, str) and _TABLE_NAME_RE.fullmatch(data):
            sql, params = self.dialect.list_columns_sql(data)
            outcome = self.query(sql, params)
            return [_first_value(row) for row in outcome.value or ()]

        logger.warning(
            "show_columns_from expects a table name or a list of names; %r given", data
        )
        return []

    def close(self) -> None:
        """Close the connection; the next query reconnects."""

        connection = self._connection
        self._connection = None
        if connection is not None:
            connection.close()

    def __enter__(self) -> QueryRunner:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _first_value(row: Any) -> Any:
    return next(iter(row.values()), None)
