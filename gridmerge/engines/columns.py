"""Column inference engine: derive grid column definitions from rows."""

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from gridmerge.models.columns import ColumnDefinition
from gridmerge.models.enums import ColumnScan, ColumnType

_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_UPPER = re.compile(r"([A-Z])")


def detect_column_type(value: Any) -> ColumnType:
    """Classify a single sampled value.

    ISO strings with both a ``T`` and a ``Z`` (``2024-01-01T00:00:00Z``) are
    datetimes; other strings starting ``YYYY-MM-DD`` are dates.
    """
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return ColumnType.NUMBER
    if isinstance(value, datetime):
        return ColumnType.DATETIME
    if isinstance(value, date):
        return ColumnType.DATE
    if isinstance(value, str):
        looks_like_datetime = "T" in value and "Z" in value
        if _DATE_PREFIX.match(value):
            return ColumnType.DATETIME if looks_like_datetime else ColumnType.DATE
        if looks_like_datetime:
            return ColumnType.DATETIME
    return ColumnType.TEXT


def column_title(key: str) -> str:
    """``orderId`` -> ``Order Id``."""
    if not key:
        return key
    return key[0].upper() + _UPPER.sub(r" \1", key[1:])


def _is_null(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _unify(types: Iterable[ColumnType]) -> ColumnType:
    """Combine the types seen in one column during a full scan."""
    seen = set(types)
    if not seen:
        return ColumnType.TEXT
    if len(seen) == 1:
        return seen.pop()
    if seen == {ColumnType.DATE, ColumnType.DATETIME}:
        return ColumnType.DATETIME
    return ColumnType.TEXT


def _sample_columns(rows: Sequence[Any]) -> list[ColumnDefinition]:
    sample = next((row for row in rows if isinstance(row, Mapping)), None)
    if sample is None:
        return []
    return [
        ColumnDefinition(key=key, title=column_title(key), type=detect_column_type(value))
        for key, value in sample.items()
    ]


def _full_scan_columns(rows: Sequence[Any]) -> list[ColumnDefinition]:
    types: dict[str, list[ColumnType]] = {}
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        for key, value in row.items():
            seen = types.setdefault(key, [])
            if not _is_null(value):
                seen.append(detect_column_type(value))
    return [
        ColumnDefinition(key=key, title=column_title(key), type=_unify(seen))
        for key, seen in types.items()
    ]


def apply_column_overrides(
    columns: list[ColumnDefinition],
    fields: Sequence[str] | None = None,
    hidden_columns: Sequence[str] | None = None,
    column_order: Sequence[str] | None = None,
) -> list[ColumnDefinition]:
    """Reorder, hide, and allow-list columns, in that order."""
    if column_order:
        by_key = {column.key: column for column in columns}
        ordered: list[ColumnDefinition] = []
        for key in dict.fromkeys(column_order):
            if key in by_key:
                ordered.append(by_key[key])
        columns = ordered

    if hidden_columns:
        hidden = set(hidden_columns)
        columns = [column for column in columns if column.key not in hidden]

    if fields:
        allowed = set(fields)
        columns = [column for column in columns if column.key in allowed]

    return columns


def infer_columns(
    rows: Sequence[Any],
    fields: Sequence[str] | None = None,
    hidden_columns: Sequence[str] | None = None,
    column_order: Sequence[str] | None = None,
    scan: ColumnScan = ColumnScan.SAMPLE,
) -> list[ColumnDefinition]:
    """Infer column definitions for a merged row list.

    With ``ColumnScan.SAMPLE`` only the first row is inspected: keys that
    appear only in later rows get no column, and each type comes from the
    first row's value. ``ColumnScan.FULL`` reads every row.
    """
    if not rows:
        return []
    if scan == ColumnScan.FULL:
        columns = _full_scan_columns(rows)
    else:
        columns = _sample_columns(rows)
    return apply_column_overrides(columns, fields, hidden_columns, column_order)


def _coerce_column(raw: Mapping[str, Any]) -> ColumnDefinition | None:
    """Normalize a user-supplied column dict; ``None`` if it has no usable key."""
    key = raw.get("key") or raw.get("field") or raw.get("header") or raw.get("name")
    if not key:
        return None
    try:
        column_type = ColumnType(raw.get("type") or ColumnType.TEXT)
    except ValueError:
        column_type = ColumnType.TEXT
    return ColumnDefinition(
        key=str(key),
        title=str(raw.get("title") or raw.get("header") or key),
        sortable=raw.get("sortable") is not False,
        filterable=raw.get("filterable") is not False,
        type=column_type,
    )


def resolve_columns(
    rows: Sequence[Any],
    columns: Sequence[Mapping[str, Any] | ColumnDefinition] | None = None,
    fields: Sequence[str] | None = None,
    hidden_columns: Sequence[str] | None = None,
    column_order: Sequence[str] | None = None,
    scan: ColumnScan = ColumnScan.SAMPLE,
) -> list[ColumnDefinition]:
    """Use explicit column definitions when given, otherwise infer them from rows.

    Explicit columns get the order and hidden overrides but not the ``fields``
    allow-list, which only narrows inferred columns.
    """
    if not columns:
        return infer_columns(rows, fields, hidden_columns, column_order, scan)

    normalized: list[ColumnDefinition] = []
    for raw in columns:
        if isinstance(raw, ColumnDefinition):
            normalized.append(raw)
        elif isinstance(raw, Mapping):
            column = _coerce_column(raw)
            if column is not None:
                normalized.append(column)
    return apply_column_overrides(normalized, None, hidden_columns, column_order)
