"""Result cursor to row-mapping conversion."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, List, Sequence

from .coercion import unescape_string
from .contracts import StatementPort
from .errors import BindResultError, DuplicateColumnOverflow
from .types import RowMapping, Rows

MAX_DUPLICATE_SUFFIX = 999


def resolve_column_names(names: Sequence[str]) -> List[str]:
    """Give every column a unique key, keeping the statement's column order.

    The first occurrence keeps the bare name; later ones become `name_2`,
    `name_3`, ... using the smallest suffix not already taken.
    """

    resolved: List[str] = []
    taken: set[str] = set()
    for name in names:
        key = name
        suffix = 2
        while key in taken:
            if suffix >= MAX_DUPLICATE_SUFFIX:
                raise DuplicateColumnOverflow(
                    f"Column {name!r} repeats more than {MAX_DUPLICATE_SUFFIX - 2} times."
                )
            key = f"{name}_{suffix}"
            suffix += 1
        taken.add(key)
        resolved.append(key)
    return resolved


def _copy_value(value: Any) -> Any:
    if isinstance(value, str):
        return unescape_string(value)
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def build_row(keys: Sequence[str], buffer: Sequence[Any]) -> RowMapping:
    """Copy one fetched buffer into a read-only mapping."""

    if len(buffer) != len(keys):
        raise BindResultError(
            f"Result buffer has {len(buffer)} values for {len(keys)} columns."
        )
    return MappingProxyType({key: _copy_value(value) for key, value in zip(keys, buffer)})


def materialize(statement: StatementPort) -> Rows:
    """Fetch every remaining row of an executed read statement.

    Returns an empty list when the statement matched nothing. Raises
    `BindResultError` if the driver's row shape disagrees with the columns.
    """

    if statement.store_result() <= 0:
        return []

    keys = resolve_column_names(statement.describe_columns())
    rows: Rows = []
    while True:
        buffer = statement.fetch_next()
        if buffer is None:
            break
        rows.append(build_row(keys, buffer))
    return rows
