"""Tests for the table output of the entry point."""

import pytest

from trade_pager.main import format_page


@pytest.mark.unit
class TestFormatPage:

    def test_tid_column_first(self, sample_trades):
        lines = format_page(sample_trades).splitlines()

        assert lines[0].split(" | ")[0].strip() == "tid"
        assert [c.strip() for c in lines[0].split(" | ")] == ["tid", "amount", "date", "price", "type"]
        assert lines[2].startswith("5701")
        assert lines[3].startswith("5702")
        assert len(lines) == 4

    def test_missing_keys_render_blank(self):
        lines = format_page([{"tid": 1, "price": 10}, {"tid": 2}]).splitlines()

        assert lines[3].split(" | ")[1].strip() == ""

    def test_empty_page(self):
        assert format_page([]) == ""
