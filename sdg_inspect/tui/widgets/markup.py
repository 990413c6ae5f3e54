"""
Rendering of decorated SDG content as Rich text.

The formatter embeds a small, fixed vocabulary of presentational tags in
string values (``<span class="sdg-user-tag">``, ``<div class="sdg-answer">``
and so on). This module maps those tags to Rich styles. Any other text,
including unrelated HTML, is shown literally.
"""

from __future__ import annotations

import html
import re

from rich.text import Text

# CSS class -> Rich style
SDG_STYLES: dict[str, str] = {
    "sdg-user-tag": "bold #005cc5 on #e5eef9",
    "sdg-assistant-tag": "bold #22863a on #e8f3eb",
    "sdg-question": "#005cc5",
    "sdg-answer": "#22863a",
    "sdg-document": "italic #9147ff",
    "sdg-domain": "bold #6f42c1",
}

# Left gutter drawn in front of wrapped question/answer lines
WRAPPER_GUTTERS: dict[str, str] = {
    "sdg-question": "▎ ",
    "sdg-answer": "▎ ",
}

MARKER_TAG_CLASSES = frozenset(["sdg-user-tag", "sdg-assistant-tag"])

# Each alternative ends where the formatter closed its own tag: marker spans
# hold only the escaped marker, a wrapper runs up to the next marker tag or
# the end of the value, and a metadata span wraps the whole value.
_TAG_PATTERN = re.compile(
    r'<span class="(?P<marker>sdg-(?:user|assistant)-tag)">'
    r"(?P<marker_body>&lt;\|(?:user|assistant)\|&gt;)</span>"
    r'|<div class="(?P<wrapper>sdg-question|sdg-answer)">(?P<wrapper_body>.*?)</div>'
    r'(?=\n?(?:<span class="sdg-(?:user|assistant)-tag">|\Z))'
    r'|<span class="(?P<meta>sdg-document|sdg-domain)">(?P<meta_body>.*?)</span>\Z',
    re.DOTALL,
)


def _tag_parts(match: re.Match[str]) -> tuple[str, str]:
    """The css class and body of whichever tag alternative matched."""
    for group in ("marker", "wrapper", "meta"):
        css_class = match.group(group)
        if css_class is not None:
            return css_class, match.group(f"{group}_body")
    raise ValueError(f"unmatched tag: {match.group(0)!r}")


def _append_wrapped(text: Text, body: str, css_class: str, style: str) -> None:
    gutter = WRAPPER_GUTTERS.get(css_class)
    if gutter is None:
        text.append(body, style=style)
        return
    for i, line in enumerate(body.split("\n")):
        if i:
            text.append("\n")
        text.append(gutter, style=f"bold {style}")
        text.append(line, style=style)


def decorated_to_text(value: str, base_style: str = "") -> Text:
    """Convert decorated content into a Rich Text.

    Args:
        value: A string that may contain sdg-* presentational tags.
        base_style: Style applied to text outside the tags.

    Returns:
        The styled text. Marker tags render as '<|user|>' and '<|assistant|>'.

    Examples:
        >>> decorated_to_text('<span class="sdg-domain">math</span>').plain
        'math'
        >>> decorated_to_text("<b>kept</b>").plain
        '<b>kept</b>'
    """
    text = Text()
    position = 0
    for match in _TAG_PATTERN.finditer(value):
        css_class, body = _tag_parts(match)
        style = SDG_STYLES[css_class]
        if match.start() > position:
            text.append(value[position : match.start()], style=base_style)
        if css_class in MARKER_TAG_CLASSES:
            body = html.unescape(body)
        _append_wrapped(text, body, css_class, style)
        position = match.end()

    if position < len(value):
        text.append(value[position:], style=base_style)
    return text


def strip_sdg_tags(value: str) -> str:
    """Return the plain text of decorated content."""
    return decorated_to_text(value).plain
