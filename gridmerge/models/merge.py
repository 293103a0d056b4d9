"""Merge configuration and merge outcome models."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gridmerge.exceptions import ConfigurationError
from gridmerge.models.columns import ColumnDefinition
from gridmerge.models.enums import MergeStrategy


class MergeConfig(BaseModel):
    """Declarative merge configuration.

    Accepts the camelCase keys used by data-grid front ends
    (``autoDetectMergeFields``, ``identityField``) as well as snake_case.
    Unknown keys such as ``mergeStrategy`` are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    by: list[str] = Field(default_factory=list)
    preserve: list[str] = Field(default_factory=list)
    auto_detect: bool = Field(default=True, alias="autoDetectMergeFields")
    identity_field: str | None = Field(default=None, alias="identityField")

    @classmethod
    def from_file(cls, path: Path) -> "MergeConfig":
        """Load a merge configuration from a JSON file."""
        if not path.exists():
            raise ConfigurationError(str(path), "file not found")
        try:
            raw = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigurationError(str(path), f"invalid JSON ({exc.msg})") from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(str(path), "expected a JSON object")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or str(path)
            raise ConfigurationError(field, first["msg"]) from exc


class DetectedMergeFields(BaseModel):
    """Result of heuristic merge-field detection over a keyed source set."""

    merge_key_fields: list[str] = Field(default_factory=list)
    preserve_fields: list[str] = Field(default_factory=list)
    common_fields: list[str] = Field(default_factory=list)
    used_fallback: bool = False


class MergeOutcome(BaseModel):
    """Describes how a source set was turned into a flat row list."""

    strategy: MergeStrategy
    merge_key_fields: list[str] = Field(default_factory=list)
    preserve_fields: list[str] = Field(default_factory=list)
    identity_field: str | None = None
    source_names: list[str] = Field(default_factory=list)
    input_rows: int = 0
    output_rows: int = 0

    @property
    def merged(self) -> bool:
        return self.strategy == MergeStrategy.MERGED


class NormalizedTable(BaseModel):
    rows: list[dict] = Field(default_factory=list)
    columns: list[ColumnDefinition] = Field(default_factory=list)
    outcome: MergeOutcome
