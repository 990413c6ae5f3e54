"""
Export Mixin for saving and copying the decorated JSONL.

Provides:
- _get_output_dir(): Get output directory from app or default
- _run_save(): Write text to a file in a background thread
- _copy_text(): Copy text to the system clipboard

Usage:
    class MyScreen(ExportMixin, Screen):
        def action_save(self):
            self._run_save(self.controller.formatted_content)
"""

from __future__ import annotations

import logging
import os

from textual import work

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILENAME = "sdg_formatted.jsonl"


def write_output(text: str, output_dir: str, filename: str = DEFAULT_OUTPUT_FILENAME) -> str:
    """Write text to output_dir/filename, creating the directory if needed.

    Args:
        text: The content to write.
        output_dir: Target directory.
        filename: Target file name.

    Returns:
        The path written.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
        if text and not text.endswith("\n"):
            f.write("\n")
    return path


class ExportMixin:
    """Mixin providing save and copy helpers for the decorated output."""

    def _get_output_dir(self) -> str:
        """Get the output directory from app or use the current directory.

        Returns:
            The output directory path.
        """
        output_dir = getattr(self.app, "_output_dir", None)
        if not output_dir:
            output_dir = "."
        return output_dir

    def _copy_text(self, text: str) -> bool:
        """Copy text to the clipboard.

        Returns:
            False when there was nothing to copy.
        """
        if not text.strip():
            self.notify("Nothing to copy", severity="warning")
            return False
        self.app.copy_to_clipboard(text)
        self.notify("Copied!")
        return True

    def _run_save(self, text: str, filename: str = DEFAULT_OUTPUT_FILENAME) -> bool:
        """Save text in the background.

        Returns:
            False when there was nothing to save.
        """
        if not text.strip():
            self.notify("Nothing to save", severity="warning")
            return False
        self._run_save_worker(text, self._get_output_dir(), filename)
        return True

    @work(thread=True)
    def _run_save_worker(self, text: str, output_dir: str, filename: str) -> None:
        """Background worker for saving."""
        try:
            path = write_output(text, output_dir, filename)
        except OSError as e:
            logger.exception("save failed")
            self.app.call_from_thread(
                self.notify, f"Save failed: {e}", severity="error"
            )
            return
        self.app.call_from_thread(self.notify, f"Saved! {path}")
