"""Heuristic detection of merge keys and preserved fields."""

import logging
from collections.abc import Mapping
from typing import Any

from gridmerge.models.merge import DetectedMergeFields
from gridmerge.normalization.sources import is_row

logger = logging.getLogger(__name__)

# Substrings (matched against the lowercase field name) that mark a field as
# an identity component or as a descriptive field worth keeping across merges.
MERGE_KEY_HINTS = ("id", "code", "date", "key")
PRESERVE_HINTS = ("name", "team", "hq", "location")


def _matches(field: str, hints: tuple[str, ...]) -> bool:
    lowered = field.lower()
    return any(hint in lowered for hint in hints)


def _all_fields(sources: Mapping[str, Any]) -> list[str]:
    """Every field name seen in any row of any array source, first-seen order."""
    seen: dict[str, None] = {}
    for rows in sources.values():
        if not isinstance(rows, (list, tuple)):
            continue
        for row in rows:
            if is_row(row):
                for key in row:
                    seen.setdefault(key, None)
    return list(seen)


def _present_in(field: str, rows: Any) -> bool:
    if not isinstance(rows, (list, tuple)):
        return False
    return any(is_row(row) and field in row for row in rows)


def common_fields(sources: Mapping[str, Any]) -> list[str]:
    """Fields that at least one row of every source carries, regardless of value."""
    return [
        field
        for field in _all_fields(sources)
        if all(_present_in(field, rows) for rows in sources.values())
    ]


def detect_merge_fields(sources: Mapping[str, Any]) -> DetectedMergeFields:
    """Guess merge keys and preserved fields from the fields every source shares.

    Merge keys are common fields that look like identifiers, codes, dates, or
    keys; preserved fields are common fields that look like names, teams, HQs,
    or locations. When no identifier-like field exists the first common field
    becomes the sole merge key.
    """
    common = common_fields(sources)
    merge_keys = [field for field in common if _matches(field, MERGE_KEY_HINTS)]
    preserve = [field for field in common if _matches(field, PRESERVE_HINTS)]

    used_fallback = False
    if not merge_keys and common:
        merge_keys = [common[0]]
        used_fallback = True

    logger.debug(
        "Detected merge keys=%s preserve=%s common=%s fallback=%s",
        merge_keys, preserve, common, used_fallback,
    )
    return DetectedMergeFields(
        merge_key_fields=merge_keys,
        preserve_fields=preserve,
        common_fields=common,
        used_fallback=used_fallback,
    )
