"""Tests for CLI functionality in sdg_inspect.tui.app main function."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

from sdg_inspect.formatting.highlighter import USER_TAG

# Path to the module
APP_MODULE = "sdg_inspect"


def run_app(*args: str) -> subprocess.CompletedProcess:
    """Run the inspector with given arguments."""
    return subprocess.run(
        [sys.executable, "-m", APP_MODULE, *args],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
        timeout=60,
    )


class TestCLIBasic:
    """Basic CLI functionality tests."""

    def test_help_flag(self):
        """--help should show usage."""
        result = run_app("--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
        assert "--dump" in result.stdout

    def test_file_not_found_error(self):
        """Non-existent file should error with message."""
        result = run_app("/nonexistent/file.jsonl")
        assert result.returncode == 1
        assert "not found" in result.stderr.lower()

    def test_directory_rejected(self, tmp_path):
        result = run_app(str(tmp_path))
        assert result.returncode == 1
        assert "not a file" in result.stderr.lower()

    def test_negative_debounce_rejected(self, sample_jsonl_file):
        result = run_app(str(sample_jsonl_file), "--debounce", "-1")
        assert result.returncode == 1


class TestCLIDump:
    """Tests for --dump."""

    def test_dump_prints_decorated_jsonl(self, sample_jsonl_file):
        result = run_app(str(sample_jsonl_file), "--dump")
        assert result.returncode == 0
        lines = result.stdout.split("\n")
        # two records plus the trailing newline of the file
        assert len(lines) == 3
        first = json.loads(lines[0])
        assert USER_TAG in first["messages"][1]["content"]

    def test_dump_keeps_plain_lines(self, tmp_path):
        path = tmp_path / "mixed.jsonl"
        path.write_text('not json\n\n{"messages": []}\n', encoding="utf-8")
        result = run_app(str(path), "--dump")
        assert result.returncode == 0
        assert result.stdout.split("\n")[:3] == ["not json", "", '{"messages": []}']

    def test_dump_rejects_unsupported_extension(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("x\n", encoding="utf-8")
        result = run_app(str(path), "--dump")
        assert result.returncode == 1
        assert "unsupported" in result.stderr.lower()

    def test_dump_without_path(self):
        result = run_app("--dump")
        assert result.returncode == 1
        assert "requires a path" in result.stderr

    def test_dump_writes_log_file(self, sample_jsonl_file, tmp_path):
        log_file = tmp_path / "inspect.log"
        result = run_app(str(sample_jsonl_file), "--dump", "--log-file", str(log_file))
        assert result.returncode == 0
        assert log_file.exists()
