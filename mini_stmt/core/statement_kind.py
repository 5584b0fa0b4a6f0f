"""Leading-verb statement classification.

This is a lightweight heuristic, not a parser: statements that start with a
comment or a CTE (`WITH ...`) are classified as `OTHER`.
"""

from __future__ import annotations

from enum import Enum


class StatementKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT = "select"
    SHOW = "show"
    OTHER = "other"

    @property
    def is_read(self) -> bool:
        return self in (StatementKind.SELECT, StatementKind.SHOW)


def leading_verb(sql: str) -> str:
    """Return the first whitespace-delimited token, lower-cased."""

    parts = str(sql).split(None, 1)
    if not parts:
        return ""
    return parts[0].lower()


def classify(sql: str) -> StatementKind:
    """Classify SQL by its leading verb (`"   SELECT 1"` -> `SELECT`)."""

    try:
        return StatementKind(leading_verb(sql))
    except ValueError:
        return StatementKind.OTHER
