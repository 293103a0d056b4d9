"""Column aggregates for grid footers and filters."""

import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from gridmerge.models.columns import ColumnDefinition, FooterTotals
from gridmerge.models.enums import ColumnType

# Key fragments that mark a column as numeric even before looking at values
NUMERIC_KEY_HINTS = (
    "amount", "total", "sum", "revenue", "cost", "profit", "price", "value", "service", "emi", "cheque",
)


def is_number(value: Any) -> bool:
    """True for real numbers; booleans and NaN are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, Decimal):
        return not value.is_nan()
    return isinstance(value, int)


def get_unique_values(rows: Sequence[Any], key: str) -> list[Any]:
    """Distinct non-``None`` values of ``key`` in first-seen order."""
    unique: list[Any] = []
    seen: set = set()
    for row in rows:
        if not isinstance(row, dict):
            continue
        value = row.get(key)
        if value is None:
            continue
        try:
            if value in seen:
                continue
            seen.add(value)
        except TypeError:
            # Unhashable values fall back to an equality scan
            if value in unique:
                continue
        unique.append(value)
    return unique


def calculate_footer_totals(
    rows: Sequence[Any],
    show_totals: bool = True,
    show_averages: bool = False,
    show_counts: bool = False,
) -> FooterTotals:
    """Sum, average, and count the numeric columns of ``rows``.

    Candidate columns are the keys of the first row; a column is numeric when
    any row holds a number for it. Non-numeric cells are ignored.
    """
    data = [row for row in rows if isinstance(row, dict)]
    if not data:
        return FooterTotals()

    result = FooterTotals()
    for key in data[0]:
        values = [row[key] for row in data if key in row and is_number(row[key])]
        if not values:
            continue
        total = sum(float(value) for value in values)
        if show_totals:
            result.totals[key] = total
        if show_averages:
            result.averages[key] = total / len(values)
        if show_counts:
            result.counts[key] = len(values)
    return result


def is_numeric_column(
    column: ColumnDefinition,
    currency_columns: Sequence[str] = (),
    rows: Sequence[Any] = (),
) -> bool:
    """Decide whether a column should get numeric footer treatment."""
    if column.type == ColumnType.NUMBER:
        return True
    if column.key in currency_columns:
        return True
    lowered = column.key.lower()
    if any(hint in lowered for hint in NUMERIC_KEY_HINTS):
        return True
    sample = [row.get(column.key) for row in rows[:10] if isinstance(row, dict)]
    return any(is_number(value) for value in sample)
