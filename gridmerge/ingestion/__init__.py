"""Loaders for reading row sources from CSV and JSON files."""

import logging
from collections.abc import Iterable
from pathlib import Path

from gridmerge.exceptions import UnsupportedFormatError
from gridmerge.ingestion.base import BaseLoader, LoadResult
from gridmerge.ingestion.csv_loader import CSVLoader
from gridmerge.ingestion.json_loader import JSONLoader
from gridmerge.models.rows import Row

logger = logging.getLogger(__name__)

_LOADER_MAP: dict[str, type[BaseLoader]] = {
    ".csv": CSVLoader,
    ".json": JSONLoader,
}


def get_loader(file_path: Path) -> BaseLoader:
    """Return the loader for a file based on its extension."""
    suffix = file_path.suffix.lower()
    loader_cls = _LOADER_MAP.get(suffix)
    if loader_cls is None:
        raise UnsupportedFormatError(file_path, suffix)
    return loader_cls()


def load_sources(paths: Iterable[Path]) -> dict[str, list[Row]]:
    """Load every file into one keyed source set.

    Sources are named by file stem (or by key, for JSON objects of arrays).
    A repeated name gets a ``_2``, ``_3`` ... suffix.
    """
    sources: dict[str, list[Row]] = {}
    for path in paths:
        loader = get_loader(path)
        for result in loader.load(path):
            for warning in loader.validate(result):
                logger.warning(warning)
            name = result.source_name
            suffix = 2
            while name in sources:
                name = f"{result.source_name}_{suffix}"
                suffix += 1
            sources[name] = result.rows
    return sources


__all__ = [
    "BaseLoader",
    "CSVLoader",
    "JSONLoader",
    "LoadResult",
    "get_loader",
    "load_sources",
]
