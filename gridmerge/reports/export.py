"""Export merged rows to CSV or JSON."""

import csv
import io
import json
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from gridmerge.models.columns import ColumnDefinition
from gridmerge.models.enums import ExportFormat
from gridmerge.models.rows import Row


def _json_default(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Sequence[Row], columns: Sequence[ColumnDefinition]) -> str:
    """CSV text with column titles as the header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([column.title for column in columns])
    for row in rows:
        writer.writerow([_cell(row.get(column.key)) for column in columns])
    return buf.getvalue()


def rows_to_json(rows: Sequence[Row], columns: Sequence[ColumnDefinition] | None = None) -> str:
    """JSON array of rows, narrowed to ``columns`` when given."""
    if columns:
        keys = [column.key for column in columns]
        rows = [{key: row.get(key) for key in keys} for row in rows]
    return json.dumps(list(rows), indent=2, default=_json_default)


def export_rows(
    rows: Sequence[Row],
    columns: Sequence[ColumnDefinition],
    fmt: ExportFormat,
    path: Path | None = None,
) -> str:
    """Render rows in ``fmt`` and write them to ``path`` if given.

    CSV files are written with a UTF-8 BOM so spreadsheet tools detect the
    encoding.
    """
    if fmt == ExportFormat.CSV:
        content = rows_to_csv(rows, columns)
        encoding = "utf-8-sig"
    else:
        content = rows_to_json(rows, columns)
        encoding = "utf-8"
    if path is not None:
        path.write_text(content, encoding=encoding)
    return content
