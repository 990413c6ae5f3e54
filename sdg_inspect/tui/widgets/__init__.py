"""TUI widgets for the SDG inspector."""

from sdg_inspect.tui.widgets.markup import decorated_to_text, strip_sdg_tags
from sdg_inspect.tui.widgets.preview_block import (
    PlainBlock,
    PreviewBlock,
    SdgBlock,
    create_block,
)
from sdg_inspect.tui.widgets.preview_panel import PreviewPanel
from sdg_inspect.tui.widgets.source_editor import SourceEditor

__all__ = [
    # Editor
    "SourceEditor",
    # Preview
    "PreviewPanel",
    "PreviewBlock",
    "SdgBlock",
    "PlainBlock",
    "create_block",
    # Markup rendering
    "decorated_to_text",
    "strip_sdg_tags",
]
