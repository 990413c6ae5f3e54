"""
Formatting module for SDG JSONL buffers.

This module turns raw JSONL text into decorated JSONL and into one
LineRecord per line, and provides the offset/line arithmetic used to keep
an editor and a rendered preview in step.

Usage:
    from sdg_inspect.formatting import format_jsonl, parse_jsonl

    decorated = format_jsonl(raw_text)
    for record in parse_jsonl(raw_text):
        print(record.index, record.kind)
"""

from sdg_inspect.formatting.highlighter import (
    escape_html,
    highlight_qna_pairs,
    process_metadata,
)
from sdg_inspect.formatting.jsonl_formatter import (
    FormatResult,
    format_jsonl,
    format_jsonl_line,
    inspect_jsonl,
    parse_jsonl,
    parse_jsonl_line,
)
from sdg_inspect.formatting.positions import (
    block_id,
    block_index,
    line_count,
    line_start_offset,
    location_to_offset,
    offset_to_line,
    offset_to_location,
)
from sdg_inspect.formatting.records import LineRecord, Message, PlainLine, SdgEntry
from sdg_inspect.formatting.sources import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    ExampleLoadError,
    detect_format,
    fetch_example,
    read_jsonl_text,
)

__all__ = [
    # Records
    "LineRecord",
    "Message",
    "PlainLine",
    "SdgEntry",
    # Formatting
    "FormatResult",
    "format_jsonl",
    "format_jsonl_line",
    "inspect_jsonl",
    "parse_jsonl",
    "parse_jsonl_line",
    # Highlighting
    "escape_html",
    "highlight_qna_pairs",
    "process_metadata",
    # Positions
    "block_id",
    "block_index",
    "line_count",
    "line_start_offset",
    "location_to_offset",
    "offset_to_line",
    "offset_to_location",
    # Sources
    "EXTENSION_MAP",
    "SUPPORTED_FORMATS",
    "ExampleLoadError",
    "detect_format",
    "fetch_example",
    "read_jsonl_text",
]
