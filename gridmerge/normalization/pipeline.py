"""Normalization pipeline: turn raw grid data into one flat row list."""

import logging
from typing import Any

from gridmerge.engines.columns import infer_columns
from gridmerge.models.columns import ColumnOptions
from gridmerge.models.enums import MergeStrategy
from gridmerge.models.merge import MergeConfig, MergeOutcome, NormalizedTable
from gridmerge.models.rows import GROUP_FIELD, Row
from gridmerge.normalization.detection import detect_merge_fields
from gridmerge.normalization.merger import RowMerger
from gridmerge.normalization.sources import (
    filter_rows,
    iter_source_rows,
    needs_merging,
    source_names,
    tag_groups,
)

logger = logging.getLogger(__name__)


class TableNormalizer:
    """Merges grid data (flat or keyed by source) and infers its columns."""

    def __init__(
        self,
        merge_config: MergeConfig | None = None,
        auto_merge: bool = True,
        group_field: str = GROUP_FIELD,
    ) -> None:
        self.merge_config = merge_config or MergeConfig()
        self.auto_merge = auto_merge
        self.group_field = group_field

    def normalize(self, data: Any, options: ColumnOptions | None = None) -> NormalizedTable:
        """Merge ``data`` into rows and infer the column schema of the result."""
        rows, outcome = self.process(data)
        options = options or ColumnOptions()
        columns = infer_columns(
            rows,
            fields=options.fields,
            hidden_columns=options.hidden_columns,
            column_order=options.column_order,
            scan=options.scan,
        )
        return NormalizedTable(rows=rows, columns=columns, outcome=outcome)

    def process(self, data: Any) -> tuple[list[Row], MergeOutcome]:
        """Return the flat row list for ``data`` plus a description of what was done."""
        if not needs_merging(data):
            rows = filter_rows(data)
            return rows, MergeOutcome(
                strategy=MergeStrategy.PASSTHROUGH,
                input_rows=len(rows),
                output_rows=len(rows),
            )

        names = source_names(data)
        input_rows = sum(1 for _ in iter_source_rows(data))

        if not self.auto_merge:
            rows = tag_groups(data, self.group_field)
            return rows, MergeOutcome(
                strategy=MergeStrategy.GROUP_TAGGED,
                source_names=names,
                input_rows=input_rows,
                output_rows=len(rows),
            )

        merge_keys, preserve = self.resolve_fields(data)
        if not merge_keys:
            logger.warning(
                "No merge keys resolved for sources %s; tagging rows with '%s' instead",
                names, self.group_field,
            )
            rows = tag_groups(data, self.group_field)
            return rows, MergeOutcome(
                strategy=MergeStrategy.GROUP_TAGGED,
                preserve_fields=preserve,
                source_names=names,
                input_rows=input_rows,
                output_rows=len(rows),
            )

        merger = RowMerger(merge_keys, preserve, self.merge_config.identity_field)
        rows = merger.merge(data)
        return rows, MergeOutcome(
            strategy=MergeStrategy.MERGED,
            merge_key_fields=merge_keys,
            preserve_fields=preserve,
            identity_field=merger.identity_field,
            source_names=names,
            input_rows=input_rows,
            output_rows=len(rows),
        )

    def resolve_fields(self, data: Any) -> tuple[list[str], list[str]]:
        """Explicit merge/preserve fields win; empty lists fall back to detection."""
        merge_keys = list(self.merge_config.by)
        preserve = list(self.merge_config.preserve)
        if self.merge_config.auto_detect and (not merge_keys or not preserve):
            detected = detect_merge_fields(data)
            if not merge_keys:
                merge_keys = detected.merge_key_fields
            if not preserve:
                preserve = detected.preserve_fields
        logger.debug("Resolved merge keys=%s preserve=%s", merge_keys, preserve)
        return merge_keys, preserve


def process_with_merge(
    data: Any,
    auto_merge_enabled: bool = True,
    merge_config: MergeConfig | dict | None = None,
) -> list[Row]:
    """Flatten ``data`` into grid rows, merging keyed sources when enabled.

    Flat input passes through with non-row entries dropped. Keyed input is
    merged by the configured (or detected) keys; when no key can be resolved,
    or auto-merge is off, rows are flattened and tagged with their source
    name under ``__group``.
    """
    if isinstance(merge_config, dict):
        merge_config = MergeConfig.model_validate(merge_config)
    rows, _ = TableNormalizer(merge_config, auto_merge=auto_merge_enabled).process(data)
    return rows
