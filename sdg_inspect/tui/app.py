"""
Main Textual application for the SDG Inspector.

Opens a JSONL buffer (from a file, an example URL/path, or pasted text) in an
editor beside a live preview that decorates SDG records with user/assistant
markers.

Usage:
    sdg-inspect data/train.jsonl
    sdg-inspect --example https://example.org/sample.jsonl
    sdg-inspect data/train.jsonl --dump > decorated.jsonl
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from textual.app import App
from textual.binding import Binding

from sdg_inspect.formatting import detect_format, format_jsonl, read_jsonl_text
from sdg_inspect.tui.sync_controller import SyncTimings
from sdg_inspect.tui.views.inspect_screen import InspectScreen

logger = logging.getLogger(__name__)


class SdgInspectApp(App):
    """A Textual app for inspecting SDG JSONL records."""

    TITLE = "SDG Inspect"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        path: str | None = None,
        example: str | None = None,
        output_dir: str = ".",
        timings: SyncTimings | None = None,
    ):
        """Initialize the app.

        Args:
            path: Optional JSONL file to open.
            example: Optional example URL or path to load.
            output_dir: Output directory for saved files.
            timings: Editor/preview sync delays.
        """
        super().__init__()
        self._path = path
        self._example = example
        self._output_dir = output_dir
        self._timings = timings or SyncTimings()
        self.inspect_screen: InspectScreen | None = None

    def on_mount(self) -> None:
        """Push the inspect screen and load the requested source."""
        initial_text = self._load_path(self._path) if self._path else None
        self.inspect_screen = InspectScreen(
            initial_text, example=self._example, timings=self._timings
        )
        self.push_screen(self.inspect_screen)

    def _load_path(self, filepath: str) -> str | None:
        """Read a JSONL file, notifying on failure."""
        try:
            file_format = detect_format(filepath)
            text = read_jsonl_text(filepath)
        except ValueError as e:
            self.notify(f"Unsupported file: {e}", severity="error")
            return None
        except OSError as e:
            self.notify(f"Error loading file: {e}", severity="error")
            return None

        self.title = f"SDG Inspect - {os.path.basename(filepath)} ({file_format})"
        logger.info("loaded %s (%d chars)", filepath, len(text))
        return text


def configure_logging(log_file: str | None) -> None:
    """Send diagnostics to a file. Without one, logging stays unconfigured."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Inspect SDG JSONL records in a terminal UI with a live, "
        "synchronized preview of user/assistant turns."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to a JSONL file to open",
    )
    parser.add_argument(
        "--example",
        default=None,
        help="URL or path of example JSONL to load",
    )
    parser.add_argument(
        "-O",
        "--output-dir",
        default=".",
        help="Output directory for saved files (default: current directory)",
    )
    parser.add_argument(
        "--debounce",
        type=float,
        default=SyncTimings.debounce,
        help=f"Seconds to wait after an edit before reformatting "
        f"(default: {SyncTimings.debounce})",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the decorated JSONL to stdout and exit",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file",
    )
    args = parser.parse_args()

    configure_logging(args.log_file)

    if args.path:
        if not os.path.exists(args.path):
            print(f"Error: Path not found: {args.path}", file=sys.stderr)
            sys.exit(1)

        if not os.access(args.path, os.R_OK):
            print(f"Error: Permission denied: {args.path}", file=sys.stderr)
            sys.exit(1)

        if os.path.isdir(args.path):
            print(f"Error: Not a file: {args.path}", file=sys.stderr)
            sys.exit(1)

    if args.debounce < 0:
        print("Error: --debounce must be non-negative", file=sys.stderr)
        sys.exit(1)

    if args.dump:
        if not args.path:
            print("Error: --dump requires a path", file=sys.stderr)
            sys.exit(1)
        try:
            text = read_jsonl_text(args.path)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        formatted = format_jsonl(text)
        sys.stdout.write(formatted)
        if formatted and not formatted.endswith("\n"):
            sys.stdout.write("\n")
        return

    app = SdgInspectApp(
        path=args.path,
        example=args.example,
        output_dir=args.output_dir,
        timings=SyncTimings(debounce=args.debounce),
    )
    app.run()


if __name__ == "__main__":
    main()
