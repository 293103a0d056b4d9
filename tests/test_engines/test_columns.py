"""Tests for the column inference engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from gridmerge.engines.columns import (
    column_title,
    detect_column_type,
    infer_columns,
    resolve_columns,
)
from gridmerge.models.columns import ColumnDefinition
from gridmerge.models.enums import ColumnScan, ColumnType


class TestDetectColumnType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, ColumnType.NUMBER),
            (9.5, ColumnType.NUMBER),
            (Decimal("1.10"), ColumnType.NUMBER),
            (True, ColumnType.BOOLEAN),
            (False, ColumnType.BOOLEAN),
            ("2024-01-01", ColumnType.DATE),
            ("2024-01-01 10:00", ColumnType.DATE),
            ("2024-01-01T00:00:00Z", ColumnType.DATETIME),
            ("Tuesday 10Z", ColumnType.DATETIME),
            ("2024-01-01T10:00:00+05:30", ColumnType.DATE),
            ("Apr-2025", ColumnType.TEXT),
            (None, ColumnType.TEXT),
            (date(2024, 1, 1), ColumnType.DATE),
            (datetime(2024, 1, 1, 12), ColumnType.DATETIME),
            ([1, 2], ColumnType.TEXT),
        ],
    )
    def test_types(self, value, expected):
        assert detect_column_type(value) == expected


class TestColumnTitle:
    def test_camel_case(self):
        assert column_title("orderId") == "Order Id"
        assert column_title("createdAt") == "Created At"

    def test_leading_capital_not_spaced(self):
        assert column_title("EBSCode") == "E B S Code"

    def test_simple_and_empty(self):
        assert column_title("total") == "Total"
        assert column_title("") == ""


class TestInferColumns:
    def test_empty_rows(self):
        assert infer_columns([]) == []

    def test_types_from_first_row(self, order_rows):
        columns = infer_columns(order_rows)
        assert [(c.key, c.type) for c in columns] == [
            ("orderId", ColumnType.NUMBER),
            ("total", ColumnType.NUMBER),
            ("createdAt", ColumnType.DATETIME),
        ]
        assert columns[0].title == "Order Id"
        assert columns[0].sortable and columns[0].filterable

    def test_order_and_hidden(self, order_rows):
        columns = infer_columns(order_rows, hidden_columns=["createdAt"], column_order=["total", "orderId"])
        assert [c.key for c in columns] == ["total", "orderId"]

    def test_order_drops_unknown_and_unlisted_keys(self, order_rows):
        columns = infer_columns(order_rows, column_order=["missing", "createdAt", "createdAt"])
        assert [c.key for c in columns] == ["createdAt"]

    def test_field_allow_list(self, order_rows):
        columns = infer_columns(order_rows, fields=["createdAt", "orderId"])
        assert [c.key for c in columns] == ["orderId", "createdAt"]

    def test_hidden_applies_before_allow_list(self, order_rows):
        columns = infer_columns(order_rows, fields=["total"], hidden_columns=["total"])
        assert columns == []

    def test_sample_scan_ignores_later_keys(self):
        rows = [{"a": None}, {"a": 1, "b": "x"}]
        columns = infer_columns(rows)
        assert [(c.key, c.type) for c in columns] == [("a", ColumnType.TEXT)]

    def test_sample_skips_leading_non_rows(self):
        columns = infer_columns(["junk", {"a": 1}])
        assert [c.key for c in columns] == ["a"]

    def test_full_scan_sees_every_key(self):
        rows = [{"a": None}, {"a": 1, "b": "x"}]
        columns = infer_columns(rows, scan=ColumnScan.FULL)
        assert [(c.key, c.type) for c in columns] == [
            ("a", ColumnType.NUMBER),
            ("b", ColumnType.TEXT),
        ]

    def test_full_scan_type_unification(self):
        rows = [
            {"when": "2024-01-01", "mixed": 1, "empty": None},
            {"when": "2024-01-02T00:00:00Z", "mixed": "one", "empty": None},
        ]
        columns = {c.key: c.type for c in infer_columns(rows, scan=ColumnScan.FULL)}
        assert columns == {
            "when": ColumnType.DATETIME,
            "mixed": ColumnType.TEXT,
            "empty": ColumnType.TEXT,
        }


class TestResolveColumns:
    def test_infers_without_explicit_columns(self, order_rows):
        columns = resolve_columns(order_rows)
        assert [c.key for c in columns] == ["orderId", "total", "createdAt"]

    def test_normalizes_explicit_columns(self, order_rows):
        columns = resolve_columns(
            order_rows,
            columns=[
                {"field": "total", "header": "Grand Total", "type": "number"},
                {"name": "orderId", "sortable": False},
                {"title": "no key"},
                {"key": "note", "type": "unknown"},
            ],
        )
        assert columns == [
            ColumnDefinition(key="total", title="Grand Total", type=ColumnType.NUMBER),
            ColumnDefinition(key="orderId", title="orderId", sortable=False),
            ColumnDefinition(key="note", title="note", type=ColumnType.TEXT),
        ]

    def test_explicit_columns_with_order_and_hidden(self, order_rows):
        columns = resolve_columns(
            order_rows,
            columns=[{"key": "a"}, {"key": "b"}, {"key": "c"}],
            hidden_columns=["b"],
            column_order=["c", "b", "a"],
        )
        assert [c.key for c in columns] == ["c", "a"]
