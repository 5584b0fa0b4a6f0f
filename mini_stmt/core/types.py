"""Shared core type aliases used across contracts, executor, and ports."""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

QueryParams = Optional[Sequence[Any]]

BoundRow = Tuple[Any, ...]
Escaper = Callable[[str], str]

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]
