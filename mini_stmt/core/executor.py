"""Prepare, bind, execute and classify one SQL statement.

`execute` owns the statement handle it prepares: the handle is closed and the
telemetry lap recorded on every exit path, whatever the outcome.
"""

from __future__ import annotations

import logging
from typing import Optional

from .batch import execute_batch
from .coercion import coerce_row
from .contracts import ConnectionPort, StatementPort
from .errors import ErrorKind, StatementError
from .materializer import materialize
from .outcomes import AffectedCount, Done, Failure, InsertId, Outcome, Rows
from .params import ParameterDescriptor
from .statement_kind import StatementKind, classify
from .telemetry import QueryTelemetry
from .types import Escaper

logger = logging.getLogger(__name__)


def fail(
    telemetry: QueryTelemetry,
    kind: ErrorKind,
    message: str,
    row: Optional[int] = None,
) -> Failure:
    """Build a `Failure`, log it and record the elapsed time."""

    telemetry.lap()
    logger.warning("%s: %s (sql=%r)", kind.value, message, telemetry.sql)
    return Failure(kind, message, row=row)


def arity_message(placeholders: int, params: int, types: int) -> str:
    return (
        "Bind param fail: the number of parameters doesn't match the placeholders "
        f"in the statement (placeholders={placeholders}, params={params}, types={types})"
    )


def execute(
    connection: ConnectionPort,
    sql: str,
    descriptor: Optional[ParameterDescriptor],
    *,
    telemetry: Optional[QueryTelemetry] = None,
) -> Outcome:
    """Run `sql` once (or once per row for multi-row inserts).

    Args:
        connection: Connection capability used to prepare and escape.
        sql: SQL template with positional placeholders.
        descriptor: Parsed parameters, or `None` when none were usable.
        telemetry: Diagnostics record updated in place.

    Returns:
        An outcome; driver and validation failures come back as `Failure`.
    """

    if telemetry is None:
        telemetry = QueryTelemetry()
        telemetry.start(sql, ())

    try:
        statement = connection.prepare(sql)
    except StatementError as exc:
        return fail(telemetry, ErrorKind.PREPARE_ERROR, f"Prepare fail: {exc}")

    try:
        outcome = _run(statement, sql, descriptor, connection.escape_string, telemetry)
    finally:
        statement.close()
    telemetry.lap()
    logger.debug("%r finished in %d us (ok=%s)", sql, telemetry.duration_micros, outcome.ok)
    return outcome


def _run(
    statement: StatementPort,
    sql: str,
    descriptor: Optional[ParameterDescriptor],
    escape: Escaper,
    telemetry: QueryTelemetry,
) -> Outcome:
    kind = classify(sql)
    placeholders = statement.param_count
    telemetry.param_count = placeholders

    if placeholders <= 0:
        try:
            statement.execute()
            return _collect(statement, kind, telemetry)
        except StatementError as exc:
            return fail(telemetry, exc.kind, str(exc))

    if descriptor is None:
        return fail(telemetry, ErrorKind.BIND_ARITY_ERROR, arity_message(placeholders, 0, 0))

    if descriptor.multi_row and kind is StatementKind.INSERT:
        width = descriptor.first_row_width
        if descriptor.format_count != placeholders or width != descriptor.format_count:
            return fail(
                telemetry,
                ErrorKind.BIND_ARITY_ERROR,
                arity_message(placeholders, width, descriptor.format_count),
            )
        return execute_batch(statement, descriptor, escape=escape, telemetry=telemetry)

    if descriptor.format_count != placeholders or descriptor.value_count != placeholders:
        return fail(
            telemetry,
            ErrorKind.BIND_ARITY_ERROR,
            arity_message(placeholders, descriptor.value_count, descriptor.format_count),
        )

    try:
        row = coerce_row(descriptor.tags, descriptor.values, escape)
        statement.bind(row, descriptor.bind_types)
        statement.execute()
        return _collect(statement, kind, telemetry)
    except StatementError as exc:
        return fail(telemetry, exc.kind, str(exc))


def _collect(statement: StatementPort, kind: StatementKind, telemetry: QueryTelemetry) -> Outcome:
    if kind is StatementKind.INSERT:
        telemetry.insert_id = statement.insert_id
        telemetry.affected_rows = statement.affected_rows
        return InsertId(statement.insert_id)
    if kind in (StatementKind.UPDATE, StatementKind.DELETE):
        telemetry.affected_rows = statement.affected_rows
        return AffectedCount(statement.affected_rows)
    if kind.is_read:
        rows = materialize(statement)
        telemetry.num_rows = len(rows)
        return Rows(tuple(rows))
    return Done()
