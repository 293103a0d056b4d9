"""Source-set helpers: shape detection, flattening, and group tagging."""

from collections.abc import Iterator, Mapping
from typing import Any

from gridmerge.models.rows import GROUP_FIELD, Row

_ARRAY_TYPES = (list, tuple)


def is_row(value: Any) -> bool:
    """True if ``value`` can be treated as a row (a mapping of field -> scalar)."""
    return isinstance(value, Mapping)


def needs_merging(value: Any) -> bool:
    """True if ``value`` is a keyed source set: a mapping holding at least one array."""
    if not isinstance(value, Mapping):
        return False
    return any(isinstance(item, _ARRAY_TYPES) for item in value.values())


def iter_source_rows(sources: Mapping[str, Any]) -> Iterator[tuple[str, Row]]:
    """Yield ``(source_name, row)`` in source order, then row order.

    Sources that are not arrays and entries that are not rows are skipped.
    """
    for name, rows in sources.items():
        if not isinstance(rows, _ARRAY_TYPES):
            continue
        for row in rows:
            if is_row(row):
                yield name, row


def flatten_sources(sources: Mapping[str, Any]) -> list[Row]:
    """Flatten a keyed source set into one list of row copies."""
    return [dict(row) for _, row in iter_source_rows(sources)]


def tag_groups(sources: Mapping[str, Any], group_field: str = GROUP_FIELD) -> list[Row]:
    """Flatten a keyed source set, tagging each row with its source name."""
    return [{**row, group_field: name} for name, row in iter_source_rows(sources)]


def filter_rows(rows: Any) -> list[Row]:
    """Keep only the row entries of a flat sequence."""
    if not isinstance(rows, _ARRAY_TYPES):
        return []
    return [row if isinstance(row, dict) else dict(row) for row in rows if is_row(row)]


def source_names(sources: Mapping[str, Any]) -> list[str]:
    """Names of the sources that actually hold an array."""
    return [str(name) for name, rows in sources.items() if isinstance(rows, _ARRAY_TYPES)]
