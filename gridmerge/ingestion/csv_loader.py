"""CSV loader: one file is one source."""

import csv
from pathlib import Path

from gridmerge.exceptions import SourceLoadError
from gridmerge.ingestion.base import BaseLoader, LoadResult
from gridmerge.models.rows import Row


def _coerce(value: str) -> int | float | str:
    """Parse an int or float cell; anything else stays text."""
    stripped = value.strip()
    if not stripped:
        return value
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return value


class CSVLoader(BaseLoader):
    """Reads a CSV file into rows keyed by header.

    Args:
        first_row_as_header: Use the first row as field names; otherwise fields
            are named ``Column1``, ``Column2``, ...
        coerce_numbers: Convert numeric-looking cells to int/float.
    """

    def __init__(self, first_row_as_header: bool = True, coerce_numbers: bool = False) -> None:
        self.first_row_as_header = first_row_as_header
        self.coerce_numbers = coerce_numbers

    def load(self, file_path: Path) -> list[LoadResult]:
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        text = file_path.read_text(encoding="utf-8-sig")  # Handle BOM
        try:
            records = [
                [cell.strip() for cell in record]
                for record in csv.reader(text.splitlines())
                if any(cell.strip() for cell in record)
            ]
        except csv.Error as exc:
            raise SourceLoadError(str(file_path), f"Error parsing CSV: {exc}") from exc

        if not records:
            raise SourceLoadError(str(file_path), "CSV file is empty")

        if self.first_row_as_header:
            headers, data = records[0], records[1:]
        else:
            width = max(len(record) for record in records)
            headers, data = [f"Column{i + 1}" for i in range(width)], records

        rows: list[Row] = []
        for record in data:
            row: Row = {}
            for index, header in enumerate(headers):
                cell = record[index] if index < len(record) else ""
                row[header] = _coerce(cell) if self.coerce_numbers else cell
            rows.append(row)

        return [LoadResult(source_name=file_path.stem, rows=rows, path=file_path)]
