"""
Inspect Screen: editable JSONL source beside its rendered preview.

The screen owns a SyncController and routes Textual messages to it:

- TextArea.Changed          -> controller.on_content_changed
- TextArea.SelectionChanged -> controller.on_cursor_moved (synchronous)
- SourceEditor.CursorPoked  -> controller.schedule_cursor_sync (settle delay)
- PreviewBlock.Activated    -> controller.on_block_activated
"""

from __future__ import annotations

import logging

from textual import events, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static, TextArea

from sdg_inspect.formatting import ExampleLoadError, fetch_example
from sdg_inspect.tui.mixins import DualPaneMixin, ExportMixin, VimNavigationMixin
from sdg_inspect.tui.sync_controller import SyncController, SyncTimings
from sdg_inspect.tui.widgets import PreviewBlock, PreviewPanel, SourceEditor

logger = logging.getLogger(__name__)


class InspectScreen(ExportMixin, DualPaneMixin, VimNavigationMixin, Screen):
    """Dual-pane JSONL inspector.

    The left panel holds the editable source, the right panel one block per
    source line. Moving the cursor highlights the matching block; clicking a
    block moves the cursor to its line.
    """

    CSS = """
    InspectScreen {
        layout: vertical;
    }

    #inspect-container {
        height: 1fr;
    }

    #source-panel, #preview-panel {
        width: 50%;
        border: solid $primary;
        padding: 0 1;
    }

    #source-panel {
        border-right: none;
    }

    #source-panel.active, #preview-panel.active {
        border: solid $accent;
    }

    .panel-header {
        dock: top;
        height: 1;
        text-align: center;
        text-style: bold;
    }

    #source-editor, #preview {
        height: 1fr;
    }
    """

    BINDINGS = (
        DualPaneMixin.DUAL_PANE_BINDINGS
        + VimNavigationMixin.VIM_BINDINGS
        + [
            Binding("q", "quit", "Quit", show=False),
            Binding("f5", "inspect", "Inspect", priority=True),
            Binding("ctrl+r", "toggle_display", "Raw/Formatted", priority=True),
            Binding("ctrl+s", "save_formatted", "Save", priority=True),
            Binding("ctrl+y", "copy_formatted", "Copy", priority=True),
            Binding("ctrl+l", "clear", "Clear", priority=True),
        ]
    )

    def __init__(
        self,
        initial_text: str | None = None,
        *,
        example: str | None = None,
        timings: SyncTimings | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the InspectScreen.

        Args:
            initial_text: JSONL to load once the screen is mounted.
            example: Example URL or path fetched once the screen is mounted.
            timings: Controller delay configuration.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._initial_text = initial_text
        self._example = example
        self._timings = timings or SyncTimings()
        self.controller: SyncController | None = None
        self._active_panel = "source"

    def compose(self) -> ComposeResult:
        """Compose the screen layout with side-by-side panels."""
        yield Header()
        with Horizontal(id="inspect-container"):
            with Vertical(id="source-panel", classes="active"):
                yield Static("Source", classes="panel-header")
                yield SourceEditor(id="source-editor")
            with Vertical(id="preview-panel", classes="inactive"):
                yield Static("Preview", classes="panel-header")
                yield PreviewPanel(
                    selection_grace=self._timings.selection_grace,
                    id="preview",
                )
        yield Footer()

    @property
    def editor(self) -> SourceEditor:
        return self.query_one("#source-editor", SourceEditor)

    @property
    def preview(self) -> PreviewPanel:
        return self.query_one("#preview", PreviewPanel)

    def on_mount(self) -> None:
        """Create the controller and load any initial content."""
        self.controller = SyncController(
            self.editor,
            self.preview,
            scheduler=self,
            timings=self._timings,
            selected_text=self.get_selected_text,
            on_error=self._notify_format_error,
        )
        self.preview.set_guard(self.controller.selection)
        self.controller.start()
        if self._initial_text:
            self.load_text(self._initial_text)
        self.editor.focus()
        if self._example:
            self.load_example(self._example)

    def on_unmount(self) -> None:
        if self.controller is not None:
            self.controller.stop()

    def load_text(self, text: str | None) -> bool:
        """Replace the editor contents and format them immediately."""
        if self.controller is None or not self.controller.load_text(text):
            self.notify("No content found", severity="warning")
            return False
        logger.debug("loaded %d lines into the editor", len(self.controller.blocks))
        return True

    @work(thread=True, exclusive=True)
    def load_example(self, location: str) -> None:
        """Fetch example content in the background and load it."""
        try:
            text = fetch_example(location)
        except ExampleLoadError as e:
            logger.warning("example load failed: %s", e)
            self.app.call_from_thread(self.notify, str(e), severity="error")
            return
        self.app.call_from_thread(self._apply_example, location, text)

    def _apply_example(self, location: str, text: str) -> None:
        if self.load_text(text):
            self.notify(f"Loaded example: {location}")

    def _notify_format_error(self, message: str) -> None:
        self.notify(message, severity="error")

    # ------------------------------------------------------------------
    # Message routing
    # ------------------------------------------------------------------

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller is not None:
            self.controller.on_content_changed(event.text_area.text)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.controller is not None:
            self.controller.on_cursor_moved(self.editor.get_cursor_offset())

    def on_source_editor_cursor_poked(self, event: SourceEditor.CursorPoked) -> None:
        if self.controller is not None:
            self.controller.schedule_cursor_sync()

    def on_preview_block_activated(self, event: PreviewBlock.Activated) -> None:
        event.stop()
        if self.controller is not None:
            self.controller.on_block_activated(
                event.block_id, check_selection=event.from_pointer
            )

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        """Keep the active panel in step with focus changes."""
        widget = event.widget
        if widget is self.editor:
            self._activate_panel("source")
        elif self.preview in widget.ancestors_with_self:
            self._activate_panel("preview")

    # ------------------------------------------------------------------
    # Panel and block navigation
    # ------------------------------------------------------------------

    def _focus_active_widget(self) -> None:
        if self.is_source_active:
            self.editor.focus()
            return
        preview = self.preview
        target = None
        if preview.active_index is not None:
            target = preview.block_widget(preview.active_index)
        if target is None:
            widgets = [w for w in preview.block_widgets if not w.has_class("blank")]
            target = widgets[0] if widgets else None
        (target or preview).focus()

    def _step_block(self, delta: int) -> None:
        if self.controller is None or not self.is_preview_active:
            return
        self.controller.activate_relative(delta)
        self._focus_active_block()

    def _jump_block(self, last: bool) -> None:
        if self.controller is None or not self.is_preview_active:
            return
        self.controller.activate_edge(last=last)
        self._focus_active_block()

    def _focus_active_block(self) -> None:
        """Keep keyboard focus in the preview after a block activation."""
        index = self.controller.active_index if self.controller else None
        widget = self.preview.block_widget(index) if index is not None else None
        if widget is not None:
            widget.focus()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_inspect(self) -> None:
        """Format the buffer now instead of waiting for the debounce."""
        if self.controller is None:
            return
        if not self.editor.text.strip():
            self.notify("No content found", severity="warning")
            return
        self.controller.flush()

    def action_toggle_display(self) -> None:
        """Switch the preview between blocks and decorated JSONL text."""
        raw = self.preview.toggle_raw_mode()
        self.notify("Showing decorated JSONL" if raw else "Showing formatted blocks")

    def action_save_formatted(self) -> None:
        if self.controller is not None:
            self._run_save(self.controller.formatted_content)

    def action_copy_formatted(self) -> None:
        if self.controller is not None:
            self._copy_text(self.controller.formatted_content)

    def action_clear(self) -> None:
        """Clear the editor, the preview and any pending work."""
        if self.controller is None:
            return
        self.controller.reset()
        self.editor.focus()
