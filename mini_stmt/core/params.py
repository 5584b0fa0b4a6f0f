"""Type-tagged parameter descriptors.

A parameter list follows the tag-string-first shape::

    ("is", "7", "hello")                        # one row
    ("ist", [(1, "a", "b"), (1, "c", "d")])     # multi-row insert

The tag string is resolved into `TypeTag` members once, here, so later stages
never re-interpret raw characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple


class TypeTag(str, Enum):
    """Coercion policy selected by one tag character."""

    INTEGER = "i"
    FLOAT = "d"
    RAW_TEXT = "t"
    RICH_TEXT = "a"
    TEXT = "s"

    @classmethod
    def parse(cls, char: str) -> TypeTag:
        """Resolve one tag character; unknown characters fall back to `TEXT`."""

        try:
            return cls(char)
        except ValueError:
            return cls.TEXT

    @property
    def bind_code(self) -> str:
        """Driver-level type code; raw and rich text bind as plain strings."""

        if self in (TypeTag.INTEGER, TypeTag.FLOAT):
            return self.value
        return "s"


@dataclass(frozen=True)
class ParameterDescriptor:
    """Parsed tags plus the values (or row groups) they describe."""

    tags: Tuple[TypeTag, ...]
    values: Tuple[Any, ...] = ()
    rows: Tuple[Tuple[Any, ...], ...] = ()
    multi_row: bool = False

    @property
    def format_count(self) -> int:
        return len(self.tags)

    @property
    def value_count(self) -> int:
        if self.multi_row:
            return len(self.rows)
        return len(self.values)

    @property
    def bind_types(self) -> str:
        return "".join(tag.bind_code for tag in self.tags)

    @property
    def first_row_width(self) -> int:
        if not self.rows:
            return 0
        return len(self.rows[0])


def parse_tags(tag_string: str) -> Tuple[TypeTag, ...]:
    return tuple(TypeTag.parse(char) for char in tag_string)


def parse_descriptor(
    params: Optional[Sequence[Any]], multi_row: bool = False
) -> Optional[ParameterDescriptor]:
    """Split a tag-string-first parameter list into a descriptor.

    Args:
        params: Sequence whose first element is the tag string.
        multi_row: Treat the second element as a sequence of row groups.

    Returns:
        The descriptor, or `None` when no tags were supplied (the list is
        unusable for binding).
    """

    if not params:
        return None
    items = list(params)
    tag_string = items[0]
    if not isinstance(tag_string, str):
        return None
    tags = parse_tags(tag_string)
    if len(tags) <= 0:
        return None

    rest = items[1:]
    if not multi_row:
        return ParameterDescriptor(tags=tags, values=tuple(rest))

    groups = rest[0] if rest and _is_row_group(rest[0]) else ()
    rows = tuple(
        tuple(group) if _is_row_group(group) else (group,) for group in groups
    )
    return ParameterDescriptor(tags=tags, rows=rows, multi_row=True)


def _is_row_group(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
