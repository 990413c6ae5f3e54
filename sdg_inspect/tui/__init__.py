"""
TUI SDG Inspector.

A Textual-based terminal UI that shows an editable JSONL buffer beside a
live preview of its SDG records, with the editor cursor and the preview
highlight kept in sync.

Usage:
    python -m sdg_inspect data/train.jsonl

Components:
    - SdgInspectApp: Main application class
    - InspectScreen: Source/preview dual-pane view
    - SyncController: Editor/preview synchronization logic
    - PreviewPanel: Rendered block list
"""
