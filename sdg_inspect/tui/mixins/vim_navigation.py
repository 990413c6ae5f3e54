"""
Vim Navigation Mixin for stepping through preview blocks.

Provides j/k/g/G navigation in the preview panel. Each step activates a
block, which moves the editor cursor to the block's source line. The keys
only reach the screen when the focused widget does not consume them, so
typing j/k in the source editor still inserts text.
"""

from __future__ import annotations

from textual.binding import Binding


class VimNavigationMixin:
    """Mixin providing vim-style block navigation keybindings.

    - j/k: Activate the next/previous non-blank block
    - g: Activate the first block
    - G: Activate the last block

    Subclasses must implement _step_block() and _jump_block().

    Usage:
        class MyScreen(DualPaneMixin, VimNavigationMixin, Screen):
            BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + VimNavigationMixin.VIM_BINDINGS
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def action_vim_down(self) -> None:
        """Activate the next block (vim j key)."""
        self._step_block(1)

    def action_vim_up(self) -> None:
        """Activate the previous block (vim k key)."""
        self._step_block(-1)

    def action_vim_top(self) -> None:
        """Activate the first block (vim g)."""
        self._jump_block(last=False)

    def action_vim_bottom(self) -> None:
        """Activate the last block (vim G)."""
        self._jump_block(last=True)

    def _step_block(self, delta: int) -> None:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _step_block()"
        )

    def _jump_block(self, last: bool) -> None:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _jump_block()"
        )
