"""Base loader interface for row sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from gridmerge.models.rows import Row


@dataclass
class LoadResult:
    """Rows read from one named source."""

    source_name: str
    rows: list[Row] = field(default_factory=list)
    path: Path | None = None


class BaseLoader(ABC):
    """Abstract base class for all row-source loaders."""

    @abstractmethod
    def load(self, file_path: Path) -> list[LoadResult]:
        """Read a file and return one LoadResult per source it contains."""
        ...

    def validate(self, result: LoadResult) -> list[str]:
        """Return warnings about a loaded source. Empty list means clean."""
        warnings: list[str] = []
        if not result.rows:
            warnings.append(f"{result.source_name}: no rows")
            return warnings
        header = set(result.rows[0])
        ragged = sum(1 for row in result.rows if set(row) != header)
        if ragged:
            warnings.append(f"{result.source_name}: {ragged} row(s) with a different field set")
        return warnings
