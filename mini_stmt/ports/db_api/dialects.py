"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

import datetime
import re
from decimal import Decimal
from typing import Any, Optional, Sequence, Tuple

from ...core.statement_kind import leading_verb

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _skip_quoted(sql: str, start: int, quote: str) -> int:
    i = start + 1
    n = len(sql)
    while i < n:
        ch = sql[i]
        if ch == "\\" and quote != "`":
            i += 2
            continue
        if ch == quote:
            if sql[i + 1 : i + 2] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return n


def count_placeholders(sql: str, paramstyle: str, *, hash_comments: bool = False) -> int:
    """Count bind placeholders outside quoted literals and comments.

    Supports `qmark` (`?`), `format` (`%s`, with `%%` as a literal percent)
    and `named` (`:name`, each occurrence counted, `::` casts ignored).
    `hash_comments` treats `#` as a line comment (MySQL).
    """

    if paramstyle not in {"qmark", "format", "named"}:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")

    count = 0
    i = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        if ch in "'\"`":
            i = _skip_quoted(sql, i, ch)
            continue
        if sql.startswith("--", i) or (hash_comments and ch == "#"):
            end = sql.find("\n", i)
            i = n if end < 0 else end + 1
            continue
        if sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            i = n if end < 0 else end + 2
            continue
        if paramstyle == "qmark" and ch == "?":
            count += 1
        elif paramstyle == "format" and ch == "%":
            nxt = sql[i + 1 : i + 2]
            if nxt == "s":
                count += 1
                i += 2
                continue
            if nxt == "%":
                i += 2
                continue
        elif paramstyle == "named" and ch == ":":
            if sql.startswith("::", i):
                i += 2
                continue
            match = _NAME_RE.match(sql, i + 1)
            if match is not None:
                count += 1
                i = match.end()
                continue
        i += 1
    return count


class Dialect:
    """Base dialect that defines quoting, placeholder and catalog behavior."""

    name: str = "generic"
    paramstyle: str = "qmark"
    quote_char: str = '"'
    hash_comments: bool = False
    explainable_verbs = frozenset({"select", "insert", "update", "delete", "replace", "with"})
    explain_arg: Any = None
    bindable_types: Tuple[type, ...] = (
        type(None),
        bool,
        int,
        float,
        str,
        bytes,
        bytearray,
        memoryview,
    )

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        return f"{self.quote_char}{ident}{self.quote_char}"

    def count_placeholders(self, sql: str) -> int:
        return count_placeholders(sql, self.paramstyle, hash_comments=self.hash_comments)

    def explain_sql(self, sql: str) -> Optional[str]:
        """Return an `EXPLAIN` form of `sql` used to validate it, if any."""

        if leading_verb(sql) not in self.explainable_verbs:
            return None
        return f"EXPLAIN {sql}"

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)

    def list_tables_sql(self) -> Tuple[str, Sequence[Any]]:
        raise NotImplementedError(f"{self.name} dialect cannot list tables")

    def list_columns_sql(self, table: str) -> Tuple[str, Sequence[Any]]:
        raise NotImplementedError(f"{self.name} dialect cannot list columns")


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` positional parameters)."""

    name = "sqlite"
    paramstyle = "qmark"
    quote_char = '"'

    def list_tables_sql(self) -> Tuple[str, Sequence[Any]]:
        return (
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name",
            (),
        )

    def list_columns_sql(self, table: str) -> Tuple[str, Sequence[Any]]:
        return "SELECT name FROM pragma_table_info(?) ORDER BY cid", ("s", table)


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters, `SHOW` catalog statements)."""

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"
    hash_comments = True
    # Client-side interpolation turns NULL into invalid `LIMIT NULL`.
    explain_arg = 0
    bindable_types = Dialect.bindable_types + (
        Decimal,
        datetime.date,
        datetime.datetime,
        datetime.time,
        datetime.timedelta,
    )

    def list_tables_sql(self) -> Tuple[str, Sequence[Any]]:
        return "SHOW TABLES", ()

    def list_columns_sql(self, table: str) -> Tuple[str, Sequence[Any]]:
        return f"SHOW COLUMNS FROM {self.q(table)}", ()


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters)."""

    name = "postgres"
    paramstyle = "format"
    quote_char = '"'
    bindable_types = MySQLDialect.bindable_types

    def explain_sql(self, sql: str) -> Optional[str]:
        # Untyped NULL arguments make server-side EXPLAIN reject valid SQL.
        return None

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Read the first column of a `RETURNING` row when one was produced."""

        if not getattr(cursor, "description", None):
            return None
        row = cursor.fetchone()
        if not row:
            return None
        if isinstance(row, dict):
            return next(iter(row.values()), None)
        return row[0]

    def list_tables_sql(self) -> Tuple[str, Sequence[Any]]:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = current_schema() ORDER BY table_name",
            (),
        )

    def list_columns_sql(self, table: str) -> Tuple[str, Sequence[Any]]:
        return (
            "SELECT column_name FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = %s "
            "ORDER BY ordinal_position",
            ("s", table),
        )
