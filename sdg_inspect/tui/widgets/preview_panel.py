"""
PreviewPanel widget: the rendered side of the inspector.

Displays one PreviewBlock per source line, keeps at most one of them
highlighted, and can switch to a raw view of the decorated JSONL text.
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from sdg_inspect.tui.sync_controller import RenderBlock, SelectionGuard
from sdg_inspect.tui.widgets.preview_block import (
    DEFAULT_SELECTION_GRACE,
    PreviewBlock,
    create_block,
)


class PreviewPanel(VerticalScroll):
    """Scrollable list of rendered blocks.

    The block list is replaced as a whole on every render: a fresh container
    is mounted and the previous one removed, so block ids never collide
    while the old widgets are being torn down.
    """

    DEFAULT_CSS = """
    PreviewPanel {
        height: 1fr;
        width: 100%;
        background: $surface;
        padding: 0 1;
    }

    PreviewPanel > .preview-blocks {
        height: auto;
    }

    PreviewPanel > #preview-empty {
        color: $text-muted;
        text-style: italic;
        padding: 2 1;
    }

    PreviewPanel > #preview-error {
        background: $error 20%;
        color: $text;
        padding: 0 1;
        margin-bottom: 1;
    }

    PreviewPanel > #preview-raw {
        height: auto;
    }

    PreviewPanel .hidden {
        display: none;
    }
    """

    EMPTY_TEXT = "Preview will appear here when content is entered"

    def __init__(
        self,
        guard: SelectionGuard | None = None,
        *,
        selection_grace: float = DEFAULT_SELECTION_GRACE,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the panel.

        Args:
            guard: Selection guard shared with the controller.
            selection_grace: Post-click delay before a block click is confirmed.
            name: The name of the widget.
            id: The ID of the widget in the DOM.
            classes: Space-separated CSS class names.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._guard = guard
        self._selection_grace = selection_grace
        self._blocks: tuple[RenderBlock, ...] = ()
        self._widgets: list[PreviewBlock] = []
        self._container: Vertical | None = None
        self._active: int | None = None
        self._formatted_text: str = ""
        self.raw_mode: bool = False

    def compose(self) -> ComposeResult:
        yield Static("", id="preview-error", classes="hidden")
        yield Static(self.EMPTY_TEXT, id="preview-empty")
        yield Static("", id="preview-raw", classes="hidden")

    @property
    def blocks(self) -> tuple[RenderBlock, ...]:
        return self._blocks

    @property
    def active_index(self) -> int | None:
        return self._active

    @property
    def block_widgets(self) -> list[PreviewBlock]:
        return list(self._widgets)

    def block_widget(self, index: int) -> PreviewBlock | None:
        if 0 <= index < len(self._widgets):
            return self._widgets[index]
        return None

    def set_guard(self, guard: SelectionGuard) -> None:
        """Share a selection guard with blocks rendered from now on."""
        self._guard = guard

    def render_blocks(self, blocks: Sequence[RenderBlock]) -> None:
        """Replace every rendered block."""
        self._blocks = tuple(blocks)
        self._active = None
        self._widgets = [
            create_block(block, self._guard, selection_grace=self._selection_grace)
            for block in self._blocks
        ]

        old = self._container
        self._container = Vertical(*self._widgets, classes="preview-blocks")
        self.mount(self._container)
        if old is not None:
            old.remove()

        # Blocks keep their decorated line, so the raw view is their join.
        self._formatted_text = "\n".join(block.record.decorated for block in self._blocks)
        self.query_one("#preview-raw", Static).update(Text(self._formatted_text))
        self._refresh_visibility()

    def set_active_block(self, index: int | None) -> None:
        """Highlight one block (or none), clearing the previous one first."""
        previous = self.block_widget(self._active) if self._active is not None else None
        if previous is not None:
            previous.set_highlighted(False)
        self._active = None

        widget = self.block_widget(index) if index is not None else None
        if widget is not None:
            widget.set_highlighted(True)
            self._active = index

    def scroll_block_into_view(self, index: int) -> None:
        widget = self.block_widget(index)
        if widget is None or self.raw_mode:
            return
        self.call_after_refresh(self.scroll_to_widget, widget, top=True)

    def show_error(self, message: str | None) -> None:
        error = self.query_one("#preview-error", Static)
        if message:
            error.update(Text(message))
            error.remove_class("hidden")
        else:
            error.update("")
            error.add_class("hidden")

    @property
    def formatted_text(self) -> str:
        """Decorated JSONL of the rendered blocks."""
        return self._formatted_text

    def toggle_raw_mode(self) -> bool:
        """Switch between rendered blocks and decorated JSONL text."""
        self.raw_mode = not self.raw_mode
        self._refresh_visibility()
        return self.raw_mode

    def _refresh_visibility(self) -> None:
        has_content = bool(self._blocks)
        self.query_one("#preview-empty", Static).set_class(has_content, "hidden")
        self.query_one("#preview-raw", Static).set_class(
            not (has_content and self.raw_mode), "hidden"
        )
        if self._container is not None:
            self._container.set_class(self.raw_mode, "hidden")
