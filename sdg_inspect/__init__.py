"""SDG Inspect: a terminal viewer/editor for SDG JSONL datasets."""

__version__ = "0.1.0"
