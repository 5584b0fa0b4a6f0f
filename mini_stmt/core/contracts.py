"""Core port contracts implemented by connection adapters."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, Tuple


class StatementPort(Protocol):
    """One prepared statement, owned by a single executor call.

    Driver rejections are raised as `StatementError` subclasses
    (`BindError`, `ExecutionError`, `BindResultError`).
    """

    @property
    def param_count(self) -> int: ...

    @property
    def insert_id(self) -> int: ...

    @property
    def affected_rows(self) -> int: ...

    def bind(self, values: Sequence[Any], types: str) -> None: ...

    def execute(self) -> None: ...

    def store_result(self) -> int: ...

    def describe_columns(self) -> List[str]: ...

    def fetch_next(self) -> Optional[Tuple[Any, ...]]: ...

    def close(self) -> None: ...


class ConnectionPort(Protocol):
    """Connection capability consumed by the executor."""

    def prepare(self, sql: str) -> StatementPort: ...

    def escape_string(self, text: str) -> str: ...

    def close(self) -> None: ...

