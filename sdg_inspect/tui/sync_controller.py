"""
Synchronization controller between the source editor and the preview.

The controller owns the raw buffer, the derived block list, the active
highlight and every timer that sequences them. Three flows pass through it:

    edit        -> (debounce) -> reformat -> blocks replaced, highlight cleared
    cursor move -> line number -> block highlighted and scrolled into view
    block click -> line start offset -> editor cursor moved and scrolled

Collaborators are injected as ports so the controller can be driven without
a running Textual app:

    controller = SyncController(editor, preview, scheduler=screen)
    controller.start()

A Textual Screen satisfies the Scheduler protocol directly through its
``set_timer`` and ``set_interval`` methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from sdg_inspect.formatting import (
    FormatResult,
    LineRecord,
    PlainLine,
    block_id,
    block_index,
    inspect_jsonl,
    line_start_offset,
    offset_to_line,
)

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    def set_timer(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def set_interval(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...


class EditorPort(Protocol):
    """What the controller needs from the text-editing widget."""

    @property
    def text(self) -> str: ...

    def get_cursor_offset(self) -> int: ...

    def set_cursor_offset(self, offset: int) -> None: ...

    def scroll_to_line(self, line: int) -> None: ...

    def replace_all_text(self, text: str) -> None: ...

    def focus(self) -> object: ...


class PreviewPort(Protocol):
    """What the controller needs from the block renderer."""

    def render_blocks(self, blocks: Sequence[RenderBlock]) -> None: ...

    def set_active_block(self, index: int | None) -> None: ...

    def scroll_block_into_view(self, index: int) -> None: ...

    def show_error(self, message: str | None) -> None: ...


@dataclass(frozen=True)
class RenderBlock:
    """Rendered unit for one source line.

    Attributes:
        index: Zero-based line index.
        record: The formatted record for that line.
    """

    index: int
    record: LineRecord

    @property
    def source_line(self) -> int:
        """1-based line number in the source buffer."""
        return self.index + 1

    @property
    def dom_id(self) -> str:
        """Widget id of the block in the preview."""
        return block_id(self.index)

    @property
    def is_blank(self) -> bool:
        return isinstance(self.record, PlainLine) and self.record.is_blank


@dataclass
class SyncTimings:
    """Delays (seconds) used by the controller."""

    debounce: float = 0.3
    settle_delay: float = 0.005
    resync_interval: float = 1.0
    selection_grace: float = 0.05


@dataclass
class SyncState:
    """Session state owned by the controller."""

    content: str = ""
    formatted_content: str = ""
    blocks: tuple[RenderBlock, ...] = ()
    error: str | None = None
    is_processing: bool = False


class HighlightState:
    """At most one active block index."""

    def __init__(self) -> None:
        self.active: int | None = None

    def clear(self) -> None:
        self.active = None

    def set(self, index: int) -> None:
        self.active = index


class PendingFormat:
    """Debounce token: one timer handle and a scheduled flag."""

    def __init__(self) -> None:
        self.timer: TimerHandle | None = None
        self.scheduled: bool = False

    def schedule(
        self, scheduler: Scheduler, delay: float, callback: Callable[[], None]
    ) -> None:
        """Cancel any in-flight timer and start a new one."""
        self.cancel()
        self.scheduled = True
        self.timer = scheduler.set_timer(delay, callback)

    def cancel(self) -> None:
        if self.timer is not None:
            self.timer.stop()
        self.timer = None
        self.scheduled = False


class SelectionGuard:
    """Tells a navigation click apart from the end of a text selection.

    A pointer-down arms the guard, a pointer-move with live selected text
    marks a selection in progress, and clicks are ignored while either the
    flag is set or text is still selected.
    """

    def __init__(self) -> None:
        self.selecting: bool = False

    def pointer_down(self) -> None:
        self.selecting = False

    def pointer_move(self, selected_text: str | None) -> None:
        if selected_text:
            self.selecting = True

    def blocks_navigation(self, selected_text: str | None) -> bool:
        return self.selecting or bool(selected_text)


def build_blocks(records: Sequence[LineRecord]) -> tuple[RenderBlock, ...]:
    """Project formatted records into render blocks, one per line."""
    return tuple(RenderBlock(index=i, record=record) for i, record in enumerate(records))


class SyncController:
    """Keeps an editable JSONL buffer and its rendered blocks consistent.

    Every handler runs to completion on the UI thread. Timers are the only
    deferred work, and each kind of timer has a single slot that is cancelled
    before it is rescheduled.
    """

    ERROR_PREFIX = "Failed to format JSONL content"

    def __init__(
        self,
        editor: EditorPort,
        preview: PreviewPort,
        scheduler: Scheduler,
        *,
        timings: SyncTimings | None = None,
        formatter: Callable[[str], FormatResult] = inspect_jsonl,
        selected_text: Callable[[], str | None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            editor: The source editor port.
            preview: The block renderer port.
            scheduler: Timer factory (a Textual Screen or App).
            timings: Delay configuration. Uses SyncTimings() if None.
            formatter: Whole-buffer format function.
            selected_text: Returns the live selected text, if any.
            on_error: Called with the message when formatting fails.
        """
        self._editor = editor
        self._preview = preview
        self._scheduler = scheduler
        self.timings = timings or SyncTimings()
        self._formatter = formatter
        self._selected_text = selected_text
        self._on_error = on_error

        self.state = SyncState()
        self.highlight = HighlightState()
        self.pending = PendingFormat()
        self.selection = SelectionGuard()
        self.last_cursor_offset: int = 0

        self._cursor_timer: TimerHandle | None = None
        self._resync_timer: TimerHandle | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Read-only views for collaborators
    # ------------------------------------------------------------------

    @property
    def blocks(self) -> tuple[RenderBlock, ...]:
        return self.state.blocks

    @property
    def active_index(self) -> int | None:
        return self.highlight.active

    @property
    def content(self) -> str:
        return self.state.content

    @property
    def formatted_content(self) -> str:
        return self.state.formatted_content

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def is_processing(self) -> bool:
        return self.state.is_processing

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the periodic highlight/cursor reconciliation."""
        if self._closed or self._resync_timer is not None:
            return
        self._resync_timer = self._scheduler.set_interval(
            self.timings.resync_interval, self.resync
        )

    def stop(self) -> None:
        """Cancel every timer. Late callbacks become no-ops."""
        self._closed = True
        self.pending.cancel()
        self._cancel_cursor_sync()
        if self._resync_timer is not None:
            self._resync_timer.stop()
            self._resync_timer = None

    def reset(self) -> None:
        """Clear buffer, blocks and highlight and cancel pending work."""
        self.pending.cancel()
        self._cancel_cursor_sync()
        self.state = SyncState()
        self.highlight.clear()
        self.selection.selecting = False
        self.last_cursor_offset = 0
        if self._editor.text:
            self._editor.replace_all_text("")
        self._preview.set_active_block(None)
        self._preview.render_blocks(())
        self._preview.show_error(None)
        logger.debug("controller reset")

    # ------------------------------------------------------------------
    # Text -> blocks
    # ------------------------------------------------------------------

    def on_content_changed(self, new_text: str) -> None:
        """Record an edited buffer and schedule a reformat.

        Non-empty text is formatted after the debounce window; every call
        restarts the window. Empty text, or a zero debounce, formats at once
        so the preview clears without delay.
        """
        if self._closed or new_text == self.state.content:
            return

        self.state.content = new_text
        self.state.error = None

        if new_text.strip() and self.timings.debounce > 0:
            self.pending.schedule(self._scheduler, self.timings.debounce, self._on_debounce)
        else:
            self.pending.cancel()
            self._run_format()

    def load_text(self, text: str | None) -> bool:
        """Replace the whole buffer programmatically and format immediately.

        Returns:
            False when there was nothing to load.
        """
        if self._closed or not text:
            return False

        self.pending.cancel()
        self._cancel_cursor_sync()
        # Content is recorded first so the editor's change echo is a no-op.
        self.state.content = text
        self.state.error = None
        self._editor.replace_all_text(text)
        # The editor's line model is authoritative (it may rewrite separators).
        self.state.content = self._editor.text
        self._run_format()
        return True

    def flush(self) -> None:
        """Run a pending reformat now, or format the current buffer."""
        if self._closed:
            return
        self.pending.cancel()
        self._run_format()

    def _on_debounce(self) -> None:
        self.pending.timer = None
        self.pending.scheduled = False
        if self._closed:
            return
        self._run_format()

    def _run_format(self) -> None:
        content = self.state.content
        self.state.is_processing = True
        try:
            result = self._formatter(content)
        except Exception as e:
            message = f"{self.ERROR_PREFIX}: {e}"
            logger.exception("format pass failed")
            self.state.error = message
            self.state.is_processing = False
            self._preview.show_error(message)
            if self._on_error is not None:
                self._on_error(message)
            return

        self.state.formatted_content = result.formatted
        self.state.blocks = build_blocks(result.records)
        self.state.is_processing = False
        self.state.error = None

        self.highlight.clear()
        self._preview.set_active_block(None)
        self._preview.show_error(None)
        self._preview.render_blocks(self.state.blocks)
        logger.debug("formatted %d lines", len(self.state.blocks))

    # ------------------------------------------------------------------
    # Cursor -> block
    # ------------------------------------------------------------------

    def on_cursor_moved(self, offset: int) -> int | None:
        """Highlight the block for the line under the cursor.

        Args:
            offset: Absolute cursor offset in the buffer.

        Returns:
            The active block index afterwards, or None.
        """
        if self._closed:
            return None

        self.last_cursor_offset = offset
        line = offset_to_line(self.state.content, offset)
        target = self._block_for_line(line)

        if target is not None and target == self.highlight.active:
            return target

        self._clear_highlight()
        if target is not None:
            self._set_highlight(target)
            self._preview.scroll_block_into_view(target)
        return self.highlight.active

    def schedule_cursor_sync(self, delay: float | None = None) -> None:
        """Read the editor cursor back after a short delay.

        The offset is read when the timer fires, so a read-back scheduled
        before a block click cannot apply a stale position. A delay of zero
        or less reads the cursor synchronously.
        """
        if self._closed:
            return
        if delay is None:
            delay = self.timings.settle_delay
        self._cancel_cursor_sync()
        if delay <= 0:
            # Textual timers need a positive delay; read the cursor now.
            self.on_cursor_moved(self._editor.get_cursor_offset())
            return
        self._cursor_timer = self._scheduler.set_timer(delay, self._on_cursor_timer)

    def _on_cursor_timer(self) -> None:
        self._cursor_timer = None
        if self._closed:
            return
        self.on_cursor_moved(self._editor.get_cursor_offset())

    def _cancel_cursor_sync(self) -> None:
        if self._cursor_timer is not None:
            self._cursor_timer.stop()
            self._cursor_timer = None

    def resync(self) -> None:
        """Re-assert that the highlight matches the editor cursor."""
        if self._closed or not self.state.blocks:
            return
        self.on_cursor_moved(self._editor.get_cursor_offset())

    # ------------------------------------------------------------------
    # Block -> cursor
    # ------------------------------------------------------------------

    def on_block_activated(self, target_id: str, check_selection: bool = True) -> bool:
        """Move the editor cursor to the line behind a clicked block.

        Args:
            target_id: Block id of the form 'formatted-line-{index}'.
            check_selection: Ignore the activation while text is being (or
                has just been) selected. Keyboard activation passes False.

        Returns:
            True if navigation happened.
        """
        if self._closed:
            return False
        if check_selection and self.selection.blocks_navigation(self._live_selection()):
            return False

        index = block_index(target_id)
        if index is None or not 0 <= index < len(self.state.blocks):
            return False

        self._cancel_cursor_sync()

        self._clear_highlight()
        self._set_highlight(index)
        self._preview.scroll_block_into_view(index)

        line = index + 1
        offset = line_start_offset(self.state.content, line)
        self._editor.set_cursor_offset(offset)
        self._editor.scroll_to_line(line)
        self._editor.focus()

        self.on_cursor_moved(offset)
        return True

    def activate_block(self, index: int) -> bool:
        """Activate a block by index (keyboard navigation)."""
        return self.on_block_activated(block_id(index), check_selection=False)

    def activate_relative(self, delta: int) -> bool:
        """Step the active block by delta, skipping blank placeholders."""
        blocks = self.state.blocks
        if self._closed or not blocks or delta == 0:
            return False

        current = self.highlight.active
        if current is None:
            current = self._block_for_line(
                offset_to_line(self.state.content, self.last_cursor_offset)
            )
        if current is None:
            current = -1 if delta > 0 else len(blocks)

        step = 1 if delta > 0 else -1
        remaining = abs(delta)
        index = current
        target = None
        while remaining:
            index += step
            if not 0 <= index < len(blocks):
                break
            if not blocks[index].is_blank:
                target = index
                remaining -= 1

        if target is None:
            return False
        return self.activate_block(target)

    def activate_edge(self, last: bool = False) -> bool:
        """Activate the first (or last) non-blank block."""
        candidates = [b.index for b in self.state.blocks if not b.is_blank]
        if self._closed or not candidates:
            return False
        return self.activate_block(candidates[-1] if last else candidates[0])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _live_selection(self) -> str | None:
        if self._selected_text is None:
            return None
        return self._selected_text()

    def _block_for_line(self, line: int) -> int | None:
        index = line - 1
        if 0 <= index < len(self.state.blocks):
            return self.state.blocks[index].index
        return None

    def _clear_highlight(self) -> None:
        if self.highlight.active is not None:
            self.highlight.clear()
            self._preview.set_active_block(None)

    def _set_highlight(self, index: int) -> None:
        self.highlight.set(index)
        self._preview.set_active_block(index)
