"""Mixins for the TUI application."""

from sdg_inspect.tui.mixins.dual_pane import DualPaneMixin
from sdg_inspect.tui.mixins.export import ExportMixin
from sdg_inspect.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "DualPaneMixin",
    "ExportMixin",
    "VimNavigationMixin",
]
