"""Data models for gridmerge."""

from gridmerge.models.columns import ColumnDefinition, ColumnOptions, FooterTotals
from gridmerge.models.enums import ColumnScan, ColumnType, ExportFormat, MergeStrategy
from gridmerge.models.merge import (
    DetectedMergeFields,
    MergeConfig,
    MergeOutcome,
    NormalizedTable,
)
from gridmerge.models.rows import GROUP_FIELD, Row, SourceSet

__all__ = [
    "ColumnDefinition",
    "ColumnOptions",
    "ColumnScan",
    "ColumnType",
    "DetectedMergeFields",
    "ExportFormat",
    "FooterTotals",
    "GROUP_FIELD",
    "MergeConfig",
    "MergeOutcome",
    "MergeStrategy",
    "NormalizedTable",
    "Row",
    "SourceSet",
]
