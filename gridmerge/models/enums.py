"""Enumerations for gridmerge."""

from enum import StrEnum


class ColumnType(StrEnum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TEXT = "text"


class ColumnScan(StrEnum):
    SAMPLE = "sample"  # first row only
    FULL = "full"


class MergeStrategy(StrEnum):
    PASSTHROUGH = "PASSTHROUGH"
    MERGED = "MERGED"
    GROUP_TAGGED = "GROUP_TAGGED"


class ExportFormat(StrEnum):
    JSON = "json"
    CSV = "csv"
