"""
SourceEditor widget: the editable raw JSONL pane.

A Textual TextArea that exposes the offset-based editor interface used by
the synchronization controller. Offsets are translated through the
TextArea document, whose line model is the one the cursor moves in.
"""

from __future__ import annotations

from typing import Any

from textual import events
from textual.message import Message
from textual.widgets import TextArea


class SourceEditor(TextArea):
    """Raw JSONL editor with offset-based cursor access."""

    DEFAULT_CSS = """
    SourceEditor {
        height: 1fr;
        border: none;
    }

    SourceEditor .text-area--cursor-line {
        background: $primary 15%;
    }
    """

    PLACEHOLDER = (
        "Paste the SDG JSONL content here, or start the app with a file path "
        "or --example."
    )

    class CursorPoked(Message):
        """Posted after pointer or focus events that may have moved the cursor.

        The cursor position is read back after a short delay, once the
        TextArea has finished updating its selection.
        """

        def __init__(self, editor: SourceEditor) -> None:
            self.editor = editor
            super().__init__()

    def __init__(
        self,
        text: str = "",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the editor.

        Args:
            text: Initial buffer contents.
            name: The name of the widget.
            id: The ID of the widget in the DOM.
            classes: Space-separated CSS class names.
            **kwargs: Additional arguments passed to TextArea.
        """
        kwargs.setdefault("soft_wrap", True)
        kwargs.setdefault("show_line_numbers", True)
        kwargs.setdefault("tab_behavior", "focus")
        kwargs.setdefault("placeholder", self.PLACEHOLDER)
        super().__init__(text, name=name, id=id, classes=classes, **kwargs)

    def get_cursor_offset(self) -> int:
        """Absolute offset of the cursor in the buffer."""
        return self.document.get_index_from_location(self.cursor_location)

    def set_cursor_offset(self, offset: int) -> None:
        """Place the cursor (collapsing any selection) at an offset."""
        offset = max(0, min(offset, len(self.text)))
        self.move_cursor(self.document.get_location_from_index(offset))

    def scroll_to_line(self, line: int) -> None:
        """Scroll so the given 1-based line is visible."""
        row = max(0, line - 1)
        if self.cursor_location[0] == row:
            self.scroll_cursor_visible(center=True)
        else:
            self.scroll_to(y=row, animate=False)

    def replace_all_text(self, text: str) -> None:
        """Replace the whole buffer."""
        self.load_text(text)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.post_message(self.CursorPoked(self))

    def on_focus(self, event: events.Focus) -> None:
        self.post_message(self.CursorPoked(self))
