"""
Line-oriented JSONL formatter.

Turns raw JSONL text into decorated JSONL (same line count, every SDG line
still valid JSON) and into a structured list of LineRecords used by the
preview. All functions here are pure and never raise on string input: a
line that cannot be understood degrades to a PlainLine.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from sdg_inspect.formatting.highlighter import (
    escape_html,
    process_messages,
    process_metadata,
)
from sdg_inspect.formatting.records import LineRecord, Message, PlainLine, SdgEntry


@dataclass(frozen=True)
class FormatResult:
    """Output of a whole-buffer format pass.

    Attributes:
        formatted: Decorated JSONL text, one line per source line.
        records: One LineRecord per source line, in order.
    """

    formatted: str
    records: tuple[LineRecord, ...]


def _display_str(value: Any) -> str | None:
    """Stringify a scalar field for display; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _to_message(raw: Any) -> Message:
    if not isinstance(raw, dict):
        return Message(content=_display_str(raw))
    return Message(
        content=_display_str(raw.get("content")),
        role=_display_str(raw.get("role")),
    )


def _record_id(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def parse_jsonl_line(line: str, index: int = 0) -> LineRecord:
    """Classify and decorate a single JSONL line.

    Args:
        line: One line of the buffer, without its trailing newline.
        index: Zero-based position of the line in the buffer.

    Returns:
        An SdgEntry if the line is a JSON object with a ``messages`` array,
        otherwise a PlainLine. Blank lines give an empty PlainLine.

    Examples:
        >>> parse_jsonl_line("not json").decorated
        'not json'
        >>> parse_jsonl_line('{"messages": []}').kind
        'sdg'
    """
    line = line.rstrip("\r")
    if not line.strip():
        return PlainLine(index=index, text="", decorated="")

    try:
        parsed = json.loads(line)
    except (json.JSONDecodeError, RecursionError):
        return PlainLine(index=index, text=line, decorated=escape_html(line))

    if not isinstance(parsed, dict) or not isinstance(parsed.get("messages"), list):
        return PlainLine(index=index, text=line, decorated=escape_html(line))

    process_messages(parsed["messages"])
    process_metadata(parsed)

    metadata = parsed.get("metadata")
    return SdgEntry(
        index=index,
        id=_record_id(parsed.get("id")),
        messages=tuple(_to_message(m) for m in parsed["messages"]),
        metadata=_display_str(metadata) if metadata not in (None, "") else None,
        decorated=json.dumps(parsed, ensure_ascii=False),
    )


def inspect_jsonl(content: str) -> FormatResult:
    """Format a whole buffer, producing decorated text and records together.

    Args:
        content: The raw JSONL buffer.

    Returns:
        A FormatResult. Blank or empty input yields no records and ''.
    """
    if not content.strip():
        return FormatResult(formatted="", records=())

    records = tuple(
        parse_jsonl_line(line, index) for index, line in enumerate(content.split("\n"))
    )
    return FormatResult(
        formatted="\n".join(record.decorated for record in records),
        records=records,
    )


def parse_jsonl(content: str) -> list[LineRecord]:
    """Project a JSONL buffer into one LineRecord per line."""
    return list(inspect_jsonl(content).records)


def format_jsonl_line(line: str) -> str:
    """Return the decorated form of a single line."""
    return parse_jsonl_line(line).decorated


def format_jsonl(content: str) -> str:
    """Return decorated JSONL with the same number of lines as the input.

    Examples:
        >>> format_jsonl("")
        ''
        >>> format_jsonl("a\\n\\nb").split("\\n")
        ['a', '', 'b']
    """
    return inspect_jsonl(content).formatted
