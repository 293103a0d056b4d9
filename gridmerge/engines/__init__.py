"""Column inference and aggregate engines."""

from gridmerge.engines.aggregates import (
    calculate_footer_totals,
    get_unique_values,
    is_numeric_column,
)
from gridmerge.engines.columns import (
    detect_column_type,
    infer_columns,
    resolve_columns,
)

__all__ = [
    "calculate_footer_totals",
    "detect_column_type",
    "get_unique_values",
    "infer_columns",
    "is_numeric_column",
    "resolve_columns",
]
