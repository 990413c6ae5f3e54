"""
Preview block widgets: one rendered block per source line.

SdgBlock renders an SDG record (messages, metadata, id) and PlainBlock
renders any other line literally. Blocks carry the id
``formatted-line-{index}`` and a 1-based ``source_line``. Clicking a block
asks for navigation to that line unless the click ended a text selection.
"""

from __future__ import annotations

import json
from typing import Any

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from sdg_inspect.formatting import PlainLine, SdgEntry
from sdg_inspect.tui.sync_controller import RenderBlock, SelectionGuard
from sdg_inspect.tui.widgets.markup import decorated_to_text

DEFAULT_SELECTION_GRACE: float = 0.05


class PreviewBlock(Static, can_focus=True):
    """Base class for a clickable block in the preview."""

    DEFAULT_CSS = """
    PreviewBlock {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $surface;
        border-left: blank;
    }

    PreviewBlock:hover {
        background: $boost;
    }

    PreviewBlock.highlight {
        background: $accent 15%;
        border-left: thick $accent;
    }

    PreviewBlock:focus {
        border-left: thick $secondary;
    }
    """

    BINDINGS = [
        Binding("enter", "activate", "Go to line", show=False),
    ]

    class Activated(Message):
        """Posted when the block asks to move the editor to its line.

        Attributes:
            block_id: The block's id ('formatted-line-{index}').
            index: Zero-based line index.
            from_pointer: True for mouse clicks, False for keyboard activation.
        """

        def __init__(self, block_id: str, index: int, from_pointer: bool) -> None:
            self.block_id = block_id
            self.index = index
            self.from_pointer = from_pointer
            super().__init__()

    def __init__(
        self,
        block: RenderBlock,
        guard: SelectionGuard | None = None,
        *,
        selection_grace: float = DEFAULT_SELECTION_GRACE,
        classes: str | None = None,
    ) -> None:
        """Initialize the block.

        Args:
            block: The render block to display.
            guard: Selection guard shared with the controller.
            selection_grace: Seconds to wait after a click before checking
                for a live text selection.
            classes: Space-separated CSS class names.
        """
        super().__init__(id=block.dom_id, classes=classes)
        self.block = block
        self.record = block.record
        self.source_line = block.source_line
        self._guard = guard or SelectionGuard()
        self._selection_grace = selection_grace

    @property
    def index(self) -> int:
        return self.block.index

    def compose_content(self) -> Text:
        """Compose the rich text for this block."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement compose_content()"
        )

    def on_mount(self) -> None:
        self.update(self.compose_content())

    def set_highlighted(self, active: bool) -> None:
        self.set_class(active, "highlight")

    def _selected_text(self) -> str | None:
        return self.screen.get_selected_text()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self._guard.pointer_down()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if event.button:
            self._guard.pointer_move(self._selected_text())

    def on_click(self, event: events.Click) -> None:
        if self._selection_grace > 0:
            self.set_timer(self._selection_grace, self._confirm_click)
        else:
            self._confirm_click()

    def _confirm_click(self) -> None:
        if self._guard.blocks_navigation(self._selected_text()):
            return
        self.post_message(self.Activated(self.block.dom_id, self.index, True))

    def action_activate(self) -> None:
        self.post_message(self.Activated(self.block.dom_id, self.index, False))


class SdgBlock(PreviewBlock):
    """Block for an SDG record: header, messages, metadata and id."""

    record: SdgEntry

    def compose_content(self) -> Text:
        record = self.record

        text = Text()
        text.append(f"SDG Entry #{self.source_line}", style="bold")

        for message in record.messages:
            if not message.content:
                continue
            text.append("\n\n")
            text.append(f"Role: {message.role or 'unknown'}", style="dim")
            text.append("\n")
            text.append_text(decorated_to_text(message.content))

        metadata = self._parse_metadata(record.metadata)
        if metadata:
            text.append("\n\n")
            text.append("Metadata:", style="bold")
            for key, value in metadata.items():
                text.append("\n  ")
                text.append(f"{key}: ", style="bold dim")
                if isinstance(value, str):
                    text.append_text(decorated_to_text(value))
                else:
                    text.append(json.dumps(value, ensure_ascii=False))
        elif record.metadata:
            text.append("\n\n")
            text.append("Metadata: ", style="bold")
            text.append(record.metadata)

        if record.id:
            text.append("\n\n")
            text.append(f"ID: {record.id}", style="dim")

        return text

    @staticmethod
    def _parse_metadata(metadata: str | None) -> dict[str, Any] | None:
        if not metadata:
            return None
        try:
            parsed = json.loads(metadata)
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None


class PlainBlock(PreviewBlock):
    """Block for a non-SDG line, shown verbatim."""

    record: PlainLine

    DEFAULT_CSS = """
    PlainBlock {
        color: $text-muted;
    }

    PlainBlock.blank {
        display: none;
    }
    """

    def __init__(self, block: RenderBlock, *args: Any, **kwargs: Any) -> None:
        super().__init__(block, *args, **kwargs)
        if block.is_blank:
            self.add_class("blank")

    def compose_content(self) -> Text:
        return Text(self.record.text)


def create_block(
    block: RenderBlock,
    guard: SelectionGuard | None = None,
    *,
    selection_grace: float = DEFAULT_SELECTION_GRACE,
) -> PreviewBlock:
    """Create the widget for a render block, chosen by its record type."""
    if isinstance(block.record, SdgEntry):
        return SdgBlock(block, guard, selection_grace=selection_grace)
    return PlainBlock(block, guard, selection_grace=selection_grace)
