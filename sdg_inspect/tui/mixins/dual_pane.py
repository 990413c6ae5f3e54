"""
Dual Pane Mixin for source/preview panel switching.

Tracks which of the two panes is active and keeps the ``active`` and
``inactive`` CSS classes on the panel containers in step with it.

Screens using it provide ``#source-panel`` and ``#preview-panel``
containers and implement ``_focus_active_widget()``:

    class InspectScreen(DualPaneMixin, VimNavigationMixin, Screen):
        BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
"""

from __future__ import annotations

from textual.binding import Binding

PANELS = ("source", "preview")


class DualPaneMixin:
    """Mixin for screens with a source pane and a preview pane.

    Class Attributes:
        DUAL_PANE_BINDINGS: Panel switching bindings.
    """

    DUAL_PANE_BINDINGS = [
        Binding("tab", "switch_panel", "Switch Panel", show=True),
        Binding("escape", "focus_preview", "Preview", show=False),
    ]

    _active_panel: str = "source"
    """Currently active panel ('source' or 'preview')."""

    @property
    def is_source_active(self) -> bool:
        return self._active_panel == "source"

    @property
    def is_preview_active(self) -> bool:
        return self._active_panel == "preview"

    def action_switch_panel(self) -> None:
        """Move focus to the other pane."""
        self._active_panel = PANELS[1 - PANELS.index(self._active_panel)]
        self._update_panel_styles()
        self._focus_active_widget()

    def action_focus_preview(self) -> None:
        """Leave the source pane for the preview; a no-op there already."""
        if self._active_panel != "preview":
            self.action_switch_panel()

    def _activate_panel(self, panel: str) -> None:
        """Mark a pane active after focus moved there by other means."""
        if self._active_panel != panel:
            self._active_panel = panel
            self._update_panel_styles()

    def action_quit(self) -> None:
        """Exit the application."""
        self.app.exit()

    def _update_panel_styles(self) -> None:
        """Sync the active/inactive classes; panes not yet mounted are skipped."""
        for panel in PANELS:
            matches = self.query(f"#{panel}-panel")
            if not matches:
                continue
            container = matches.first()
            is_active = panel == self._active_panel
            container.set_class(is_active, "active")
            container.set_class(not is_active, "inactive")

    def _focus_active_widget(self) -> None:
        """Focus the appropriate widget in the active pane."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _focus_active_widget()"
        )
