"""Column definition and column option models."""

from pydantic import BaseModel, Field

from gridmerge.models.enums import ColumnScan, ColumnType


class ColumnDefinition(BaseModel):
    key: str
    title: str
    sortable: bool = True
    filterable: bool = True
    type: ColumnType = ColumnType.TEXT


class ColumnOptions(BaseModel):
    """Visibility and ordering overrides applied after inference."""

    fields: list[str] = Field(default_factory=list)
    hidden_columns: list[str] = Field(default_factory=list)
    column_order: list[str] = Field(default_factory=list)
    scan: ColumnScan = ColumnScan.SAMPLE


class FooterTotals(BaseModel):
    totals: dict[str, float] = Field(default_factory=dict)
    averages: dict[str, float] = Field(default_factory=dict)
    counts: dict[str, int] = Field(default_factory=dict)
