"""Tests for offset/line arithmetic in sdg_inspect/formatting/positions.py."""

from __future__ import annotations

import pytest

from sdg_inspect.formatting import (
    block_id,
    block_index,
    line_count,
    line_start_offset,
    location_to_offset,
    offset_to_line,
    offset_to_location,
)

TEXT = "a\nbc\nd"


class TestOffsetToLine:
    """Tests for offset_to_line()."""

    @pytest.mark.parametrize(
        "offset,expected",
        [(0, 1), (1, 1), (2, 2), (4, 2), (5, 3), (6, 3)],
    )
    def test_offsets(self, offset, expected):
        assert offset_to_line(TEXT, offset) == expected

    def test_clamps_negative(self):
        assert offset_to_line(TEXT, -5) == 1

    def test_clamps_past_end(self):
        assert offset_to_line(TEXT, 1000) == 3

    def test_empty_text(self):
        assert offset_to_line("", 0) == 1


class TestLineStartOffset:
    """Tests for line_start_offset()."""

    @pytest.mark.parametrize("line,expected", [(1, 0), (2, 2), (3, 5)])
    def test_lines(self, line, expected):
        assert line_start_offset(TEXT, line) == expected

    def test_clamps_past_last_line(self):
        assert line_start_offset(TEXT, 99) == 5

    def test_clamps_below_first_line(self):
        assert line_start_offset(TEXT, 0) == 0

    def test_blank_lines(self):
        text = "x\n\n\ny"
        assert line_start_offset(text, 3) == 3
        assert offset_to_line(text, line_start_offset(text, 3)) == 3

    def test_inverse_of_offset_to_line(self):
        text = "first\n\nthird line\nfourth"
        for line in range(1, line_count(text) + 1):
            assert offset_to_line(text, line_start_offset(text, line)) == line


class TestLocations:
    """Tests for offset_to_location() and location_to_offset()."""

    def test_offset_to_location(self):
        assert offset_to_location(TEXT, 0) == (0, 0)
        assert offset_to_location(TEXT, 3) == (1, 1)
        assert offset_to_location(TEXT, 6) == (2, 1)

    def test_location_to_offset(self):
        assert location_to_offset(TEXT, (1, 1)) == 3
        assert location_to_offset(TEXT, (2, 0)) == 5

    def test_column_clamped_to_row(self):
        assert location_to_offset(TEXT, (0, 50)) == 1


class TestBlockIds:
    """Tests for block_id() and block_index()."""

    def test_block_id(self):
        assert block_id(0) == "formatted-line-0"
        assert block_id(12) == "formatted-line-12"

    def test_block_index(self):
        assert block_index("formatted-line-12") == 12

    @pytest.mark.parametrize(
        "value", ["", "formatted-line-", "formatted-line--1", "line-3", "formatted-line-3x"]
    )
    def test_block_index_rejects_other_ids(self, value):
        assert block_index(value) is None


def test_line_count():
    assert line_count("") == 1
    assert line_count("a\n") == 2
    assert line_count(TEXT) == 3
