"""Execution outcome variants returned by `QueryRunner.query`.

Every call yields exactly one outcome object. Successful variants carry the
statement's result in `value`; `Failure` carries an `ErrorKind` and the
diagnostic message instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .errors import ErrorKind, QueryFailed
from .types import RowMapping


class _Success:
    ok = True

    @property
    def value(self) -> Any:
        return None

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Rows(_Success):
    """Materialized rows of a `select` or `show` statement."""

    rows: Tuple[RowMapping, ...] = ()

    @property
    def value(self) -> list[RowMapping]:
        return list(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


@dataclass(frozen=True)
class AffectedCount(_Success):
    """Affected-row count of an `update` or `delete` statement."""

    count: int = 0

    @property
    def value(self) -> int:
        return self.count


@dataclass(frozen=True)
class InsertId(_Success):
    """Generated auto-increment id of an `insert` statement (0 if none)."""

    id: int = 0

    @property
    def value(self) -> int:
        return self.id


@dataclass(frozen=True)
class Done(_Success):
    """Empty success for statements that are neither reads nor row writes."""


@dataclass(frozen=True)
class Failure:
    """Failed statement step; `row` is the batch row index when relevant."""

    kind: ErrorKind
    message: str
    row: Optional[int] = None

    ok = False

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> Any:
        raise QueryFailed(self.kind, self.message)


@dataclass(frozen=True)
class Batch:
    """Per-row outcomes of a multi-row insert, in submission order."""

    outcomes: Tuple[Union[InsertId, Failure], ...] = ()

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failed_row(self) -> Optional[int]:
        for index, outcome in enumerate(self.outcomes):
            if not outcome.ok:
                return index
        return None

    @property
    def value(self) -> list[Optional[int]]:
        return [outcome.value for outcome in self.outcomes]

    def unwrap(self) -> list[int]:
        return [outcome.unwrap() for outcome in self.outcomes]

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)


Outcome = Union[Rows, AffectedCount, InsertId, Done, Failure, Batch]
