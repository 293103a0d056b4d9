"""JSON loader: an array of rows or an object of named arrays."""

import json
from pathlib import Path

from gridmerge.exceptions import SourceLoadError
from gridmerge.ingestion.base import BaseLoader, LoadResult
from gridmerge.normalization.sources import filter_rows, needs_merging


class JSONLoader(BaseLoader):
    """Reads grid data from JSON.

    A top-level array is one source named after the file stem. A top-level
    object whose values are arrays is a keyed source set: one source per key.
    """

    def load(self, file_path: Path) -> list[LoadResult]:
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            raw = json.loads(file_path.read_text(encoding="utf-8-sig"))
        except json.JSONDecodeError as exc:
            raise SourceLoadError(str(file_path), f"invalid JSON ({exc.msg})") from exc

        if isinstance(raw, list):
            return [LoadResult(source_name=file_path.stem, rows=filter_rows(raw), path=file_path)]

        if needs_merging(raw):
            return [
                LoadResult(source_name=str(name), rows=filter_rows(rows), path=file_path)
                for name, rows in raw.items()
                if isinstance(rows, list)
            ]

        if isinstance(raw, dict):
            # A single object is a one-row source
            return [LoadResult(source_name=file_path.stem, rows=[raw], path=file_path)]

        raise SourceLoadError(str(file_path), "expected a JSON array or object of arrays")
