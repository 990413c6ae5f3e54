"""Pytest configuration and shared fixtures for sdg_inspect tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from sdg_inspect.formatting import location_to_offset, offset_to_location


@pytest.fixture
def qna_record() -> dict[str, Any]:
    """Return an SDG record with one question/answer pair and metadata."""
    return {
        "id": "sdg-001",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {
                "role": "user",
                "content": "Context first <|user|> What is 2+2? <|assistant|> 4",
            },
        ],
        "metadata": json.dumps({"sdgDocument": "Arithmetic basics", "domain": "math"}),
    }


@pytest.fixture
def minimal_record() -> dict[str, Any]:
    """Return a minimal SDG record without markers."""
    return {
        "id": 7,
        "messages": [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there!"},
        ],
    }


@pytest.fixture
def mixed_buffer(qna_record, minimal_record) -> str:
    """A buffer mixing SDG records, a blank line and a non-JSON line."""
    return "\n".join(
        [
            json.dumps(qna_record),
            "",
            "not json at all",
            json.dumps(minimal_record),
        ]
    )


@pytest.fixture
def sample_jsonl_file(tmp_path, qna_record, minimal_record) -> Path:
    """Write a small JSONL file and return its path."""
    path = tmp_path / "sample.jsonl"
    write_jsonl(path, [qna_record, minimal_record])
    return path


def write_jsonl(path: Path, records: list[dict[str, Any]]) -> None:
    """Helper to write records to a JSONL file."""
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")


# ----------------------------------------------------------------------
# Controller test doubles
# ----------------------------------------------------------------------


class FakeTimer:
    """Timer handle recorded by FakeScheduler."""

    def __init__(self, due: float, callback: Callable[[], None], interval: float | None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeScheduler:
    """Deterministic stand-in for Textual's set_timer/set_interval."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        # Textual rejects non-positive timer delays.
        assert delay > 0
        timer = FakeTimer(self.now + delay, callback, None)
        self.timers.append(timer)
        return timer

    def set_interval(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + interval, callback, interval)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.interval is None:
                timer.stopped = True
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = target


class FakeEditor:
    """EditorPort backed by a string and a cursor offset."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = 0
        self.scrolled_to: list[int] = []
        self.focus_count = 0
        self.on_replace: Callable[[str], None] | None = None

    def get_cursor_offset(self) -> int:
        return self.cursor

    def set_cursor_offset(self, offset: int) -> None:
        self.cursor = max(0, min(offset, len(self.text)))

    def move_to(self, row: int, column: int = 0) -> None:
        self.cursor = location_to_offset(self.text, (row, column))

    @property
    def location(self) -> tuple[int, int]:
        return offset_to_location(self.text, self.cursor)

    def scroll_to_line(self, line: int) -> None:
        self.scrolled_to.append(line)

    def replace_all_text(self, text: str) -> None:
        self.text = text
        self.cursor = 0
        if self.on_replace is not None:
            self.on_replace(text)

    def focus(self) -> None:
        self.focus_count += 1


class FakePreview:
    """PreviewPort that records every call."""

    def __init__(self) -> None:
        self.blocks: tuple = ()
        self.active: int | None = None
        self.error: str | None = None
        self.render_count = 0
        self.scrolled: list[int] = []
        self.calls: list[tuple[str, Any]] = []

    def render_blocks(self, blocks) -> None:
        self.blocks = tuple(blocks)
        self.render_count += 1
        self.calls.append(("render", len(self.blocks)))

    def set_active_block(self, index: int | None) -> None:
        self.active = index
        self.calls.append(("active", index))

    def scroll_block_into_view(self, index: int) -> None:
        self.scrolled.append(index)
        self.calls.append(("scroll", index))

    def show_error(self, message: str | None) -> None:
        self.error = message
        self.calls.append(("error", message))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def preview() -> FakePreview:
    return FakePreview()
