"""Interaction mode controller.

Tracks which mutually exclusive mode is active and whether the menu is
open, and arbitrates which inputs reach the thought lifecycle. Holds no
business data.

On narrow layouts the about/purge/colour panels live inside the menu, so
requesting them opens the menu while searching closes it. On wide layouts
the menu and modal overlays are independent.
"""

import contextlib
from collections.abc import Callable
from typing import Any

from ..thoughts import TimestampedThought, filter_history
from .models import NORMAL, FocusTarget, Layout, Mode, ModeKind

NARROW_BREAKPOINT = 80  # Columns below which the layout is narrow

FocusSink = Callable[[FocusTarget], None]

_MODAL_FOCUS = {
    ModeKind.SHOWING_ABOUT: FocusTarget.ABOUT_CLOSE,
    ModeKind.CONFIRMING_PURGE: FocusTarget.PURGE_CANCEL,
    ModeKind.PICKING_COLOR: FocusTarget.COLOR_CLOSE,
}


def layout_for_width(width: int, breakpoint: int = NARROW_BREAKPOINT) -> Layout:
    """Classify a width as narrow or wide."""
    return Layout.NARROW if width < breakpoint else Layout.WIDE


class ModeController:
    """Single source of truth for interaction modes.

    Invalid transitions are no-ops that return False. Focus side effects go
    to an optional sink; sink failures are swallowed.
    """

    def __init__(
        self,
        width: int = NARROW_BREAKPOINT,
        *,
        narrow_breakpoint: int = NARROW_BREAKPOINT,
        focus_sink: FocusSink | None = None,
    ) -> None:
        self._breakpoint = narrow_breakpoint
        self._layout = layout_for_width(width, narrow_breakpoint)
        self._mode = NORMAL
        self._menu_open = False
        self._focus_sink = focus_sink
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def set_focus_sink(self, sink: FocusSink | None) -> None:
        self._focus_sink = sink

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Modes", message)

    def _focus(self, target: FocusTarget) -> None:
        if self._focus_sink is None:
            return
        try:
            self._focus_sink(target)
        except Exception as e:
            self._debug("debug", f"Focus on {target.value} failed: {e}")

    def _ignored(self, action: str) -> bool:
        self._debug("debug", f"{action} ignored in mode {self._mode.kind.value}")
        return False

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def menu_open(self) -> bool:
        return self._menu_open

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def search_term(self) -> str:
        return self._mode.term if self._mode.kind == ModeKind.SEARCHING else ""

    @property
    def accepts_draft_input(self) -> bool:
        """Draft editor is disabled while a modal is shown."""
        return not self._mode.is_modal

    @property
    def accepts_search_input(self) -> bool:
        return self._mode.kind == ModeKind.SEARCHING

    def resize(self, width: int) -> Layout:
        """Re-derive the layout from a new width."""
        self._layout = layout_for_width(width, self._breakpoint)
        return self._layout

    def visible(self, history: list[TimestampedThought]) -> list[TimestampedThought]:
        """History filtered by the active search term."""
        return filter_history(history, self.search_term)

    def request_search(self) -> bool:
        """Normal -> Searching("")."""
        if self._mode.kind != ModeKind.NORMAL:
            return self._ignored("Search request")

        self._mode = Mode.searching()
        if self._layout == Layout.NARROW:
            self._menu_open = False
        self._focus(FocusTarget.SEARCH_INPUT)
        return True

    def update_search_term(self, term: str) -> bool:
        if self._mode.kind != ModeKind.SEARCHING:
            return self._ignored("Search term update")
        self._mode = Mode.searching(term)
        return True

    def exit_search(self) -> bool:
        """Searching -> Normal."""
        if self._mode.kind != ModeKind.SEARCHING:
            return self._ignored("Exit search")
        self._mode = NORMAL
        self._focus(FocusTarget.DRAFT_EDITOR)
        return True

    def _enter_modal(self, kind: ModeKind) -> bool:
        # Entering a modal clears search; one modal cannot stack on another
        if self._mode.is_modal:
            return self._ignored(f"Request for {kind.value}")

        self._mode = Mode(kind)
        if self._layout == Layout.NARROW:
            self._menu_open = True
        self._focus(_MODAL_FOCUS[kind])
        return True

    def request_about(self) -> bool:
        return self._enter_modal(ModeKind.SHOWING_ABOUT)

    def request_purge_confirm(self) -> bool:
        return self._enter_modal(ModeKind.CONFIRMING_PURGE)

    def request_color_picker(self) -> bool:
        return self._enter_modal(ModeKind.PICKING_COLOR)

    def dismiss(self) -> bool:
        """Any modal -> Normal."""
        if not self._mode.is_modal:
            return self._ignored("Dismiss")
        self._mode = NORMAL
        self._focus(FocusTarget.DRAFT_EDITOR)
        return True

    def toggle_menu(self) -> bool:
        """Flip the menu; disabled while a modal is active."""
        if self._mode.is_modal:
            return self._ignored("Menu toggle")
        self._menu_open = not self._menu_open
        return True
