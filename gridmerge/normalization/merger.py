"""Row merge engine: union rows from several sources by a composite key.

Rows sharing a composite merge key collapse into one row; later rows override
earlier ones field by field. Preserved fields are "sticky": the first
non-empty value seen for an identity is remembered and written back whenever
a later row leaves that field empty.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from gridmerge.models.rows import Row
from gridmerge.normalization.sources import is_row, iter_source_rows

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "||"


def is_empty_value(value: Any) -> bool:
    """True for ``None``, ``""`` and numeric zero. ``False`` is a real value."""
    if value is None or value == "":
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    return False


def key_part(value: Any) -> str:
    """Stringify one key component the way a JSON consumer would print it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return str(int(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def composite_key(row: Mapping[str, Any], fields: Sequence[str]) -> str:
    """Join the row's values for ``fields`` with ``||``; missing fields count as ``""``."""
    return KEY_SEPARATOR.join(key_part(row.get(field)) for field in fields)


class RowMerger:
    """Merges a keyed source set into one row per distinct composite key.

    Args:
        merge_key_fields: Fields whose joined values identify a row.
        preserve_fields: Fields whose first non-empty value sticks to an identity.
        identity_field: Field that identifies rows for the preserve cache. When
            omitted the first preserve field that is also a merge key is used;
            if the two lists share no field the full composite merge key is
            used, so sticky values never cross from one merged row into another.
    """

    def __init__(
        self,
        merge_key_fields: Sequence[str],
        preserve_fields: Sequence[str] = (),
        identity_field: str | None = None,
    ) -> None:
        self.merge_key_fields = list(merge_key_fields)
        self.preserve_fields = list(preserve_fields)
        if identity_field is None:
            identity_field = next(
                (field for field in self.preserve_fields if field in self.merge_key_fields),
                None,
            )
        self.identity_field = identity_field

    def __call__(self, sources: Mapping[str, Sequence[Row]] | Sequence[Row]) -> list[Row]:
        return self.merge(sources)

    def merge(self, sources: Mapping[str, Sequence[Row]] | Sequence[Row]) -> list[Row]:
        """Merge all rows of ``sources``; a plain sequence is one unnamed source."""
        rows = self._flatten(sources)
        cache = self._build_preserve_cache(rows)

        merged: dict[str, Row] = {}
        for row in rows:
            key = composite_key(row, self.merge_key_fields)
            current = {**merged.get(key, {}), **row}
            self._backfill(current, cache.get(self._identity(row)))
            merged[key] = current

        logger.debug(
            "Merged %d rows into %d by %s (preserve=%s, identity=%s)",
            len(rows), len(merged), self.merge_key_fields,
            self.preserve_fields, self.identity_field or "<merge key>",
        )
        return list(merged.values())

    # --- internals ---

    @staticmethod
    def _flatten(sources: Mapping[str, Sequence[Row]] | Sequence[Row]) -> list[Row]:
        if isinstance(sources, Mapping):
            return [row for _, row in iter_source_rows(sources)]
        if isinstance(sources, (list, tuple)):
            return [row for row in sources if is_row(row)]
        return []

    def _identity(self, row: Mapping[str, Any]) -> str:
        """Preserve-cache key for a row; ``""`` means the row has no identity."""
        if self.identity_field is not None:
            value = row.get(self.identity_field)
            if value is False or is_empty_value(value):
                return ""
            return key_part(value)
        parts = [key_part(row.get(field)) for field in self.merge_key_fields]
        if not any(parts):
            return ""
        return KEY_SEPARATOR.join(parts)

    def _build_preserve_cache(self, rows: list[Row]) -> dict[str, Row]:
        """First non-empty value per identity and preserve field, frozen at first sight."""
        cache: dict[str, Row] = {}
        if not self.preserve_fields:
            return cache

        for row in rows:
            identity = self._identity(row)
            if not identity:
                continue
            entry = cache.setdefault(identity, {})
            for field in self.preserve_fields:
                if field in entry:
                    continue
                value = row.get(field)
                if not is_empty_value(value):
                    entry[field] = value
        return cache

    def _backfill(self, row: Row, cached: Row | None) -> None:
        if not cached:
            return
        for field in self.preserve_fields:
            if is_empty_value(row.get(field)) and field in cached:
                row[field] = cached[field]


def merge_rows(
    merge_key_fields: Sequence[str],
    preserve_fields: Sequence[str] = (),
    identity_field: str | None = None,
) -> Callable[[Mapping[str, Sequence[Row]] | Sequence[Row]], list[Row]]:
    """Build a merge function for the given key and preserve specification.

    Usage:
        merge = merge_rows(["id"], ["name"])
        rows = merge({"A": [...], "B": [...]})
    """
    return RowMerger(merge_key_fields, preserve_fields, identity_field)
