"""Custom exceptions for gridmerge."""

from pathlib import Path


class GridMergeError(Exception):
    """Base exception for gridmerge errors."""


class SourceLoadError(GridMergeError):
    """Raised when a row source cannot be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Load error from {source}: {message}")


class UnsupportedFormatError(SourceLoadError):
    """Raised when a source file has an extension no loader handles."""

    def __init__(self, path: Path | str, suffix: str):
        self.suffix = suffix
        super().__init__(str(path), f"Unsupported file type '{suffix or '<none>'}'. Use .csv or .json")


class ConfigurationError(GridMergeError):
    """Raised when a merge or column configuration is invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Configuration error on '{field}': {message}")
