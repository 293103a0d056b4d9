"""Report generation and export for gridmerge."""

from gridmerge.reports.export import export_rows, rows_to_csv, rows_to_json
from gridmerge.reports.merge_summary import MergeSummaryReport

__all__ = [
    "MergeSummaryReport",
    "export_rows",
    "rows_to_csv",
    "rows_to_json",
]
