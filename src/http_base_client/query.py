# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Query-string composition.

Encodes structured query objects the way qs-style web backends parse them:
nested mappings become ``parent[child]=value`` and sequences are written in
one of four ArrayFormat styles. Dates go through a configurable serializer.
"""

from collections.abc import Callable, Iterator, Mapping
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote

from .config import ArrayFormat

DateSerializer = Callable[[date], str]

# Left unescaped so encoded queries stay readable and match what qs-style
# parsers expect for bracketed keys and ISO timestamps.
_KEY_SAFE = "[]"
_VALUE_SAFE = ":"


def serialize_date(value: date) -> str:
    """Default date serializer: ISO 8601, UTC datetimes rendered with ``Z``.

    >>> serialize_date(datetime(2024, 1, 1, tzinfo=timezone.utc))
    '2024-01-01T00:00:00.000Z'
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
            return value.isoformat(timespec="milliseconds") + "Z"
        return value.isoformat(timespec="milliseconds")
    return value.isoformat()


def _scalar(value: Any, date_serializer: DateSerializer) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return date_serializer(value)
    return str(value)


def _pairs(
    prefix: str,
    value: Any,
    array_format: ArrayFormat,
    date_serializer: DateSerializer,
) -> Iterator[tuple[str, str]]:
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _pairs(f"{prefix}[{key}]", item, array_format, date_serializer)
    elif isinstance(value, (list, tuple)):
        if array_format is ArrayFormat.COMMA:
            if value:
                joined = ",".join(_scalar(item, date_serializer) for item in value)
                yield prefix, joined
            return
        for index, item in enumerate(value):
            if array_format is ArrayFormat.INDICES:
                key = f"{prefix}[{index}]"
            elif array_format is ArrayFormat.BRACKETS:
                key = f"{prefix}[]"
            else:
                key = prefix
            yield from _pairs(key, item, array_format, date_serializer)
    else:
        yield prefix, _scalar(value, date_serializer)


def stringify(
    query: Mapping[str, Any],
    array_format: ArrayFormat = ArrayFormat.BRACKETS,
    date_serializer: DateSerializer | None = None,
) -> str:
    """
    Encode a query object into a query string (without the leading ``?``).

    Args:
        query: Mapping of top-level keys to scalars, sequences or mappings.
        array_format: Encoding style for sequences.
        date_serializer: Converts date/datetime values to strings.
            Defaults to :func:`serialize_date`.

    Returns:
        The encoded query string, e.g. ``ids[]=1&ids[]=2&q=hello%20world``.
    """
    serializer = date_serializer or serialize_date
    parts = []
    for key, value in query.items():
        for name, text in _pairs(str(key), value, array_format, serializer):
            parts.append(f"{quote(name, safe=_KEY_SAFE)}={quote(text, safe=_VALUE_SAFE)}")
    return "&".join(parts)


def append_query_string(
    path: str,
    query: Mapping[str, Any] | None,
    array_format: ArrayFormat = ArrayFormat.BRACKETS,
    date_serializer: DateSerializer | None = None,
) -> str:
    """Append an encoded query object to ``path``, respecting an existing ``?``."""
    if not query:
        return path

    q_index = path.find("?")
    if q_index == -1:
        path += "?"
    elif q_index < len(path) - 1:
        path += "&"

    return path + stringify(query, array_format, date_serializer)


def join_url(base_url: str, path: str) -> str:
    """Fully-qualified URL used in diagnostics and error objects."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


__all__ = [
    "DateSerializer",
    "append_query_string",
    "join_url",
    "serialize_date",
    "stringify",
]
