"""Error kinds and exceptions raised by the engine and its ports."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure category carried by a `Failure` outcome."""

    INVALID_REQUEST = "invalid_request"
    PREPARE_ERROR = "prepare_error"
    BIND_ARITY_ERROR = "bind_arity_error"
    BIND_ERROR = "bind_error"
    EXECUTION_ERROR = "execution_error"
    BIND_RESULT_ERROR = "bind_result_error"
    ROW_WIDTH_MISMATCH = "row_width_mismatch"


class StatementError(Exception):
    """Raised by a connection or statement port when the driver rejects a step.

    The executor converts these into `Failure` outcomes; they never escape
    `QueryRunner.query`.
    """

    kind: ErrorKind = ErrorKind.EXECUTION_ERROR

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code}]: [{self.message}]"


class PrepareError(StatementError):
    kind = ErrorKind.PREPARE_ERROR


class BindError(StatementError):
    kind = ErrorKind.BIND_ERROR


class ExecutionError(StatementError):
    kind = ErrorKind.EXECUTION_ERROR


class BindResultError(StatementError):
    kind = ErrorKind.BIND_RESULT_ERROR


class QueryFailed(RuntimeError):
    """Raised by `Failure.unwrap()`."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message


class DatabaseUnavailable(RuntimeError):
    """Raised when the database connection cannot be established at all."""


class DuplicateColumnOverflow(RuntimeError):
    """Raised when a result has more same-named columns than can be renamed."""


class ConfigError(ValueError):
    """Raised when connection configuration input is invalid."""
