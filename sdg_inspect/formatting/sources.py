"""
Source loading for JSONL buffers.

Only JSONL input is accepted. Text can come from a local file or from an
example location, which may be a local path or an http(s) URL.
"""

from __future__ import annotations

from pathlib import Path

import requests

# Mapping of file extensions to format names
EXTENSION_MAP: dict[str, str] = {
    ".jsonl": "jsonl",
}

SUPPORTED_FORMATS = frozenset(["jsonl"])

EXAMPLE_FETCH_TIMEOUT: float = 10.0

# Line breaks for str.splitlines() other than '\n' and '\r'
_LINE_BREAK_ESCAPES: dict[str, str] = {
    "\x0b": "\\u000b",
    "\x0c": "\\f",
    "\x1c": "\\u001c",
    "\x1d": "\\u001d",
    "\x1e": "\\u001e",
    "\x85": "\\u0085",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_LINE_BREAK_TABLE = str.maketrans(_LINE_BREAK_ESCAPES)


class ExampleLoadError(RuntimeError):
    """Raised when example content cannot be loaded."""


def detect_format(filename: str) -> str:
    """Detect the file format from its extension.

    Args:
        filename: Path to the file.

    Returns:
        The format name ('jsonl').

    Raises:
        ValueError: If the extension is not a supported format.

    Examples:
        >>> detect_format("data.jsonl")
        'jsonl'
        >>> detect_format("DATA.JSONL")
        'jsonl'
    """
    extension = Path(filename).suffix.lower()
    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]
    raise ValueError(
        f"Unsupported file extension '{extension or '(none)'}' for {filename}. "
        f"Supported: {', '.join(sorted(EXTENSION_MAP))}"
    )


def normalize_text(text: str) -> str:
    """Strip a leading BOM and leave '\\n' as the only line break.

    '\\r\\n' and a lone '\\r' become '\\n'. The other characters that
    ``str.splitlines()`` breaks on (U+2028 and friends) are written as JSON
    escapes, so the editor shows one row per JSONL line and string values
    decode unchanged.

    Examples:
        >>> normalize_text('{"a": "x\\u2028y"}\\r\\n')
        '{"a": "x\\\\u2028y"}\\n'
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.translate(_LINE_BREAK_TABLE)


def read_jsonl_text(filename: str) -> str:
    """Read a JSONL file as normalized UTF-8 text.

    Args:
        filename: Path to the JSONL file.

    Returns:
        The file contents.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSONL file or is not valid UTF-8.
    """
    detect_format(filename)
    try:
        with open(filename, "r", encoding="utf-8") as f:
            return normalize_text(f.read())
    except UnicodeDecodeError as e:
        raise ValueError(f"{filename} is not valid UTF-8: {e}") from e


def is_url(location: str) -> bool:
    """Check whether a location is an http(s) URL."""
    return location.lower().startswith(("http://", "https://"))


def fetch_example(location: str, timeout: float = EXAMPLE_FETCH_TIMEOUT) -> str:
    """Load example JSONL from a URL or a local path.

    Args:
        location: An http(s) URL or a filesystem path.
        timeout: Request timeout in seconds for URLs.

    Returns:
        The example text, normalized.

    Raises:
        ExampleLoadError: If the example cannot be fetched or is empty.
    """
    if is_url(location):
        try:
            resp = requests.get(location, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise ExampleLoadError(f"Failed to fetch {location}: {e}") from e
        resp.encoding = resp.encoding or "utf-8"
        text = resp.text
    else:
        try:
            with open(location, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ExampleLoadError(f"Failed to load {location}: {e}") from e

    text = normalize_text(text)
    if not text.strip():
        raise ExampleLoadError("No content found in example")
    return text
