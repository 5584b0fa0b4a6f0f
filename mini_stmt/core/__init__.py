"""Public core API for parameter parsing, coercion, execution and outcomes."""

from .batch import execute_batch
from .coercion import clean, coerce_row, sanitize_rich_text, strip_slashes, to_float, to_int
from .config import ConnectionConfig
from .errors import (
    BindError,
    BindResultError,
    ConfigError,
    DatabaseUnavailable,
    DuplicateColumnOverflow,
    ErrorKind,
    ExecutionError,
    PrepareError,
    QueryFailed,
    StatementError,
)
from .executor import execute
from .materializer import materialize, resolve_column_names
from .outcomes import AffectedCount, Batch, Done, Failure, InsertId, Outcome, Rows
from .params import ParameterDescriptor, TypeTag, parse_descriptor
from .statement_kind import StatementKind, classify
from .telemetry import QueryTelemetry

__all__ = [
    "AffectedCount",
    "Batch",
    "BindError",
    "BindResultError",
    "ConfigError",
    "ConnectionConfig",
    "DatabaseUnavailable",
    "Done",
    "DuplicateColumnOverflow",
    "ErrorKind",
    "ExecutionError",
    "Failure",
    "InsertId",
    "Outcome",
    "ParameterDescriptor",
    "PrepareError",
    "QueryFailed",
    "QueryTelemetry",
    "Rows",
    "StatementError",
    "StatementKind",
    "TypeTag",
    "classify",
    "clean",
    "coerce_row",
    "execute",
    "execute_batch",
    "materialize",
    "parse_descriptor",
    "resolve_column_names",
    "sanitize_rich_text",
    "strip_slashes",
    "to_float",
    "to_int",
]
