"""TUI views for the SDG Inspector."""

from sdg_inspect.tui.views.inspect_screen import InspectScreen

__all__ = ["InspectScreen"]
