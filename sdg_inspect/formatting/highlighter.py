"""
Presentational markup for SDG message content and metadata.

Speaker markers embedded in a message's content are rendered as inert tags,
and the text following each marker is wrapped as a question or an answer:

    <|user|>Q<|assistant|>A

becomes

    <span class="sdg-user-tag">&lt;|user|&gt;</span>
    <div class="sdg-question">Q</div>
    <span class="sdg-assistant-tag">&lt;|assistant|&gt;</span>
    <div class="sdg-answer">A</div>

Each marker-to-next-marker span is wrapped independently, so several Q/A
pairs in one content string produce a flat sequence of wrappers.
"""

from __future__ import annotations

import json
import re
from typing import Any

USER_MARKER = "<|user|>"
ASSISTANT_MARKER = "<|assistant|>"

USER_TAG = '<span class="sdg-user-tag">&lt;|user|&gt;</span>'
ASSISTANT_TAG = '<span class="sdg-assistant-tag">&lt;|assistant|&gt;</span>'

# marker -> (rendered tag, wrapper class)
MARKER_STYLES: dict[str, tuple[str, str]] = {
    USER_MARKER: (USER_TAG, "sdg-question"),
    ASSISTANT_MARKER: (ASSISTANT_TAG, "sdg-answer"),
}

# metadata key -> wrapper class
METADATA_STYLES: dict[str, str] = {
    "sdgDocument": "sdg-document",
    "domain": "sdg-domain",
}

_MARKER_PATTERN = re.compile(r"(<\|user\|>|<\|assistant\|>)")


def escape_html(unsafe: str) -> str:
    """Escape HTML special characters.

    Examples:
        >>> escape_html('<a href="x">Tom & Jerry\\'s</a>')
        '&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;'
    """
    return (
        unsafe.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def has_markers(content: str) -> bool:
    """Check whether content contains a user or assistant marker."""
    return USER_MARKER in content or ASSISTANT_MARKER in content


def highlight_qna_pairs(content: str) -> str:
    """Highlight question/answer spans delimited by speaker markers.

    Text before the first marker is kept verbatim. Each marker is replaced by
    its styled tag, and the text up to the next marker (or the end of the
    string) is trimmed and wrapped in a question or answer div.

    Args:
        content: Message content that may contain '<|user|>' and
            '<|assistant|>' markers.

    Returns:
        The decorated content, or the input unchanged if it holds no markers.

    Examples:
        >>> highlight_qna_pairs("no markers here")
        'no markers here'
    """
    if not has_markers(content):
        return content

    # re.split with a capturing group alternates text, marker, text, ...
    parts = _MARKER_PATTERN.split(content)
    pieces = [parts[0]]
    for marker, segment in zip(parts[1::2], parts[2::2]):
        tag, wrapper = MARKER_STYLES[marker]
        pieces.append(tag)
        pieces.append(f'\n<div class="{wrapper}">{segment.strip()}</div>\n')
    return "".join(pieces)


def process_metadata(record: dict[str, Any]) -> None:
    """Decorate the JSON-encoded metadata string of a record in place.

    When ``record["metadata"]`` is a string holding a JSON object, non-empty
    string ``sdgDocument`` and ``domain`` values are wrapped in their styled
    spans and the object is serialized back into the field. Malformed or
    non-object metadata is left untouched.

    Args:
        record: A parsed SDG line.
    """
    metadata = record.get("metadata")
    if not metadata or not isinstance(metadata, str):
        return

    try:
        parsed = json.loads(metadata)
    except json.JSONDecodeError:
        return
    if not isinstance(parsed, dict):
        return

    for key, css_class in METADATA_STYLES.items():
        value = parsed.get(key)
        if isinstance(value, str) and value:
            parsed[key] = f'<span class="{css_class}">{value}</span>'

    record["metadata"] = json.dumps(parsed, ensure_ascii=False)


def process_messages(messages: list[Any]) -> None:
    """Highlight marker pairs in every string message content, in place."""
    for message in messages:
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            message["content"] = highlight_qna_pairs(message["content"])
