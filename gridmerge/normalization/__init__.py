"""Normalization layer: source flattening, merge-field detection, and row merging."""

from gridmerge.normalization.detection import detect_merge_fields
from gridmerge.normalization.merger import RowMerger, merge_rows
from gridmerge.normalization.pipeline import TableNormalizer, process_with_merge
from gridmerge.normalization.sources import needs_merging

__all__ = [
    "RowMerger",
    "TableNormalizer",
    "detect_merge_fields",
    "merge_rows",
    "needs_merging",
    "process_with_merge",
]
