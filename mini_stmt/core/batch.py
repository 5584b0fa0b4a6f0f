"""Multi-row insert loop over one prepared statement.

The batch is not atomic: every row that executes is committed on its own,
and a failure part-way through leaves earlier rows in place.
"""

from __future__ import annotations

import logging
from typing import List, Union

from .coercion import coerce_row
from .contracts import StatementPort
from .errors import ErrorKind, StatementError
from .outcomes import Batch, Failure, InsertId
from .params import ParameterDescriptor
from .telemetry import QueryTelemetry
from .types import Escaper

logger = logging.getLogger(__name__)


def execute_batch(
    statement: StatementPort,
    descriptor: ParameterDescriptor,
    *,
    escape: Escaper,
    telemetry: QueryTelemetry,
) -> Batch:
    """Re-bind and re-execute `statement` once per row group.

    A row whose width differs from the tag count, or a bind rejection, stops
    the batch with a `Failure` naming the row. An execution failure is
    recorded for that row and the next row is attempted.
    """

    width = descriptor.format_count
    outcomes: List[Union[InsertId, Failure]] = []

    for index, values in enumerate(descriptor.rows):
        if len(values) != width:
            message = (
                f"Row {index} has {len(values)} values but {width} type tags; "
                "every row must have the same width"
            )
            logger.warning("%s: %s", ErrorKind.ROW_WIDTH_MISMATCH.value, message)
            outcomes.append(Failure(ErrorKind.ROW_WIDTH_MISMATCH, message, row=index))
            break

        try:
            statement.bind(coerce_row(descriptor.tags, values, escape), descriptor.bind_types)
        except StatementError as exc:
            logger.warning("%s on row %d: %s", exc.kind.value, index, exc)
            outcomes.append(Failure(exc.kind, str(exc), row=index))
            break

        try:
            statement.execute()
        except StatementError as exc:
            logger.warning("%s on row %d: %s", exc.kind.value, index, exc)
            outcomes.append(Failure(exc.kind, str(exc), row=index))
            continue

        telemetry.insert_id = statement.insert_id
        telemetry.affected_rows += statement.affected_rows
        outcomes.append(InsertId(statement.insert_id))

    telemetry.lap()
    return Batch(tuple(outcomes))
