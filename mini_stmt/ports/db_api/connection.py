"""DB-API adapter implementing the core connection and statement ports."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, Type

from pymysql.converters import escape_string

from ...core.errors import (
    BindError,
    BindResultError,
    ExecutionError,
    PrepareError,
    StatementError,
)
from ...core.statement_kind import classify
from .dialects import Dialect


def _driver_error_type(conn: Any) -> Type[BaseException]:
    # PEP 249 optional extension: connections expose the module's `Error`.
    error = getattr(conn, "Error", None)
    if isinstance(error, type) and issubclass(error, BaseException):
        return error
    return Exception


def _error_details(exc: BaseException) -> Tuple[str, Optional[int]]:
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return str(args[1]), args[0]
    return str(exc) or type(exc).__name__, None


def _raise_as(error_cls: Type[StatementError], exc: BaseException) -> None:
    message, code = _error_details(exc)
    raise error_cls(message, code) from exc


class DbApiStatement:
    """Statement handle over one DB-API cursor.

    DB-API has no standalone prepare step, so the handle counts placeholders
    from the SQL text, validates explainable statements with `EXPLAIN`, and
    buffers bound values until `execute()`.
    """

    def __init__(self, conn: Any, dialect: Dialect, sql: str):
        self.sql = sql
        self._conn = conn
        self._dialect = dialect
        self._errors = _driver_error_type(conn)
        self._kind = classify(sql)
        self._param_count = dialect.count_placeholders(sql)
        self._values: Tuple[Any, ...] = ()
        self._buffer: Optional[List[Tuple[Any, ...]]] = None
        self._position = 0
        self._insert_id = 0
        self._affected_rows = 0
        self._closed = False
        try:
            self._cursor = conn.cursor()
        except self._errors as exc:
            _raise_as(PrepareError, exc)

    @property
    def param_count(self) -> int:
        return self._param_count

    @property
    def insert_id(self) -> int:
        return self._insert_id

    @property
    def affected_rows(self) -> int:
        return self._affected_rows

    def validate(self) -> None:
        """Compile the statement without running it, where the dialect can."""

        explain = self._dialect.explain_sql(self.sql)
        if explain is None:
            return
        args = (self._dialect.explain_arg,) * self._param_count
        try:
            if args:
                self._cursor.execute(explain, args)
            else:
                self._cursor.execute(explain)
        except self._errors as exc:
            self._rollback()
            _raise_as(PrepareError, exc)

    def bind(self, values: Sequence[Any], types: str) -> None:
        if len(types) != len(values):
            raise BindError(
                "Number of elements in type definition string doesn't match "
                "number of bind variables"
            )
        if len(values) != self._param_count:
            raise BindError(
                "Number of variables doesn't match number of parameters in "
                "prepared statement"
            )
        for position, value in enumerate(values):
            if not isinstance(value, self._dialect.bindable_types):
                raise BindError(
                    f"Unsupported value type {type(value).__name__} at position {position}"
                )
        self._values = tuple(values)

    def execute(self) -> None:
        self._buffer = None
        self._position = 0
        try:
            if self._param_count > 0:
                self._cursor.execute(self.sql, self._values)
            else:
                self._cursor.execute(self.sql)
            if not self._kind.is_read:
                self._affected_rows = max(getattr(self._cursor, "rowcount", 0) or 0, 0)
                self._insert_id = int(self._dialect.get_lastrowid(self._cursor) or 0)
                self._commit()
        except self._errors as exc:
            self._rollback()
            _raise_as(ExecutionError, exc)

    def store_result(self) -> int:
        """Buffer the whole result set and return its row count."""

        if self._buffer is not None:
            return len(self._buffer)
        if getattr(self._cursor, "description", None) is None:
            self._buffer = []
            return 0
        try:
            fetched = self._cursor.fetchall()
        except self._errors as exc:
            _raise_as(BindResultError, exc)
        self._buffer = [self._row_to_buffer(row) for row in fetched]
        self._position = 0
        return len(self._buffer)

    def _row_to_buffer(self, row: Any) -> Tuple[Any, ...]:
        """Normalize a driver row to a positional tuple.

        Supports tuple/list rows, mapping rows (dict cursors) and row
        objects that iterate over their values (`sqlite3.Row`).
        """

        if isinstance(row, tuple):
            return row
        if isinstance(row, Mapping):
            return tuple(row.values())
        try:
            return tuple(row)
        except TypeError as exc:
            raise BindResultError(f"Unsupported row type: {type(row)}") from exc

    def describe_columns(self) -> List[str]:
        description = getattr(self._cursor, "description", None) or ()
        return [str(column[0]) for column in description]

    def fetch_next(self) -> Optional[Tuple[Any, ...]]:
        if self._buffer is None:
            self.store_result()
        if self._position >= len(self._buffer):
            return None
        row = self._buffer[self._position]
        self._position += 1
        return row

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._buffer = None
        close = getattr(self._cursor, "close", None)
        if callable(close):
            close()

    def _commit(self) -> None:
        commit = getattr(self._conn, "commit", None)
        if callable(commit):
            commit()

    def _rollback(self) -> None:
        rollback = getattr(self._conn, "rollback", None)
        if not callable(rollback):
            return
        try:
            rollback()
        except self._errors:
            pass


class DbApiConnection:
    """Thin DB-API wrapper exposing prepare/escape/close to the executor."""

    def __init__(self, conn: Any, dialect: Dialect):
        """Create connection adapter.

        Args:
            conn: Open DB-API connection object.
            dialect: Concrete SQL dialect instance.
        """

        self._closed = False
        self.conn: Any | None = conn
        self.dialect = dialect

    @property
    def closed(self) -> bool:
        return self._closed

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def prepare(self, sql: str) -> DbApiStatement:
        """Open a statement handle for `sql`; raises `PrepareError`."""

        conn = self._require_open_connection()
        statement = DbApiStatement(conn, self.dialect, sql)
        try:
            statement.validate()
        except PrepareError:
            statement.close()
            raise
        return statement

    def escape_string(self, text: str) -> str:
        """Escape text with the driver's own routine when it has one."""

        conn = self._require_open_connection()
        escape = getattr(conn, "escape_string", None)
        if callable(escape):
            return escape(text)
        return escape_string(text)

    def close(self) -> None:
        """Close underlying connection."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        if conn is None:
            return
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> DbApiConnection:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
