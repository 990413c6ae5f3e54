"""
Offset and line arithmetic shared by the editor and the preview.

Offsets are character indices into the buffer. Lines are 1-based, matching
the ``source_line`` of a rendered block. Editor locations are 0-based
``(row, column)`` pairs. Out-of-range inputs are clamped, never rejected.
"""

from __future__ import annotations

import re

BLOCK_ID_PREFIX = "formatted-line-"

_BLOCK_ID_PATTERN = re.compile(r"^formatted-line-(\d+)$")


def line_count(text: str) -> int:
    """Number of lines in text (an empty buffer has one empty line)."""
    return text.count("\n") + 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def offset_to_line(text: str, offset: int) -> int:
    """Translate an absolute offset to a 1-based line number.

    Examples:
        >>> offset_to_line("a\\nbc\\nd", 0)
        1
        >>> offset_to_line("a\\nbc\\nd", 2)
        2
        >>> offset_to_line("a\\nbc\\nd", 99)
        3
    """
    offset = _clamp(offset, 0, len(text))
    return text.count("\n", 0, offset) + 1


def line_start_offset(text: str, line: int) -> int:
    """Offset of the first character of a 1-based line.

    Lines past the end of the buffer clamp to the start of the last line.

    Examples:
        >>> line_start_offset("a\\nbc\\nd", 1)
        0
        >>> line_start_offset("a\\nbc\\nd", 3)
        5
    """
    line = _clamp(line, 1, line_count(text))
    offset = 0
    for _ in range(line - 1):
        offset = text.index("\n", offset) + 1
    return offset


def offset_to_location(text: str, offset: int) -> tuple[int, int]:
    """Translate an offset into a 0-based (row, column) location."""
    offset = _clamp(offset, 0, len(text))
    row = text.count("\n", 0, offset)
    column = offset - (text.rfind("\n", 0, offset) + 1)
    return row, column


def location_to_offset(text: str, location: tuple[int, int]) -> int:
    """Translate a 0-based (row, column) location into an offset.

    The column is clamped to the length of the row.
    """
    row, column = location
    start = line_start_offset(text, row + 1)
    end = text.find("\n", start)
    if end == -1:
        end = len(text)
    return start + _clamp(column, 0, end - start)


def block_id(index: int) -> str:
    """Element id of the rendered block for a zero-based line index."""
    return f"{BLOCK_ID_PREFIX}{index}"


def block_index(value: str) -> int | None:
    """Inverse of block_id; None when the id does not name a block."""
    match = _BLOCK_ID_PATTERN.match(value or "")
    if match is None:
        return None
    return int(match.group(1))
