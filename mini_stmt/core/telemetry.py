"""Last-query diagnostics kept on each `QueryRunner` instance."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence


@dataclass
class QueryTelemetry:
    """Mutable diagnostics overwritten by every query.

    Not thread-safe: one instance belongs to one runner, and a runner must
    not be shared between threads.
    """

    sql: str = ""
    params: Sequence[Any] = ()
    duration_micros: int = 0
    affected_rows: int = 0
    insert_id: int = 0
    num_rows: int = 0
    param_count: int = 0
    _started: Optional[float] = field(default=None, repr=False, compare=False)

    def start(self, sql: str, params: Sequence[Any]) -> None:
        """Begin timing a new query and record its inputs."""

        self._started = time.perf_counter()
        self.sql = sql
        self.params = params
        self.duration_micros = 0
        self.affected_rows = 0
        self.insert_id = 0
        self.num_rows = 0
        self.param_count = 0

    def lap(self) -> int:
        """Store elapsed microseconds since `start()` and return them."""

        if self._started is None:
            return self.duration_micros
        self.duration_micros = int((time.perf_counter() - self._started) * 1_000_000)
        return self.duration_micros
