"""Per-tag value coercion and text sanitization.

`coerce_row` turns one row of raw values into binding-ready values according
to the row's `TypeTag`s. Text escaping is delegated to an `Escaper` supplied
by the connection, so this module never talks to a driver itself.
"""

from __future__ import annotations

import html
import math
import re
from collections.abc import Mapping
from typing import Any, Sequence
from urllib.parse import unquote_plus

from .params import TypeTag
from .types import BoundRow, Escaper

_LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_NUMERIC_STRING_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")
_SLASHED_RE = re.compile(r"\\(.?)", re.DOTALL)
_TAG_RE = re.compile(r"<(?=[^\s<])[^>]*>?")
_LINE_BREAK_RE = re.compile(r"\r\n?")

# Inverse of the MySQL escape table used by `escape_string`.
_UNESCAPE_MAP = {"0": "\0", "n": "\n", "r": "\r", "Z": "\x1a"}


def to_int(value: Any) -> Any:
    """Convert to int the way a loose numeric cast does (`"42abc"` -> 42)."""

    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", "replace")
    if isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if match is None:
            return 0
        text = match.group(1)
        if text.lstrip("+-").isdigit():
            return int(text)
        return to_int(float(text))
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def to_float(value: Any) -> Any:
    """Convert to float from the leading numeric part (`"3.14xyz"` -> 3.14)."""

    if value is None:
        return None
    if isinstance(value, float):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", "replace")
    if isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if match is None:
            return 0.0
        return float(match.group(1))
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0


def strip_slashes(text: str) -> str:
    """Remove escape backslashes (`\\'` -> `'`, `\\\\` -> `\\`, `\\0` -> NUL)."""

    return _SLASHED_RE.sub(lambda m: "\0" if m.group(1) == "0" else m.group(1), text)


def unescape_string(text: str) -> str:
    """Reverse `escape_string` once, restoring control characters."""

    return _SLASHED_RE.sub(lambda m: _UNESCAPE_MAP.get(m.group(1), m.group(1)), text)


def sanitize_rich_text(text: str) -> str:
    """Reduce user-supplied markup to plain text.

    Entities are decoded first so encoded tags are stripped too.
    """

    text = html.unescape(text)
    text = _LINE_BREAK_RE.sub("\n", text)
    text = unquote_plus(text)
    return _TAG_RE.sub("", text)


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC_STRING_RE.fullmatch(value) is not None
    return False


def clean(value: Any, escape: Escaper, *, rich: bool = False) -> Any:
    """Escape text for the driver; composites recurse with the plain policy.

    Args:
        value: Scalar or composite (mapping, list, tuple) value.
        escape: Driver escaping function.
        rich: Sanitize markup before escaping (scalars only).
    """

    if isinstance(value, Mapping):
        return {key: clean(item, escape) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(clean(item, escape) for item in value)
    if value is None or isinstance(value, bool) or is_numeric(value):
        return value
    if not isinstance(value, str):
        return value
    if rich:
        value = sanitize_rich_text(value)
    return escape(value)


def coerce_value(tag: TypeTag, value: Any, escape: Escaper) -> Any:
    if tag is TypeTag.INTEGER:
        return to_int(value)
    if tag is TypeTag.FLOAT:
        return to_float(value)
    if tag is TypeTag.RAW_TEXT:
        return strip_slashes(value) if isinstance(value, str) else value
    if tag is TypeTag.RICH_TEXT:
        return clean(value, escape, rich=True)
    return clean(value, escape)


def coerce_row(tags: Sequence[TypeTag], values: Sequence[Any], escape: Escaper) -> BoundRow:
    """Coerce one tag-aligned row; both sequences must have the same length."""

    if len(tags) != len(values):
        raise ValueError(
            f"row has {len(values)} values for {len(tags)} type tags"
        )
    return tuple(coerce_value(tag, value, escape) for tag, value in zip(tags, values))
