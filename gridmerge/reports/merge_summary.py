"""Merge summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from gridmerge.models.merge import NormalizedTable

TEMPLATE_DIR = Path(__file__).parent / "templates"


class MergeSummaryReport:
    """Renders how a source set was merged and which columns came out of it."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, table: NormalizedTable) -> str:
        """Render the summary for a normalized table."""
        template = self.env.get_template("merge_summary.txt")
        key_width = max((len(column.key) for column in table.columns), default=3)
        return template.render(
            outcome=table.outcome,
            columns=table.columns,
            key_width=max(key_width, 3),
        )
