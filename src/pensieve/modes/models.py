"""Data models for interaction modes.

A single tagged value replaces independent show/hide flags, so two modal
modes can never be active at once.
"""

from dataclasses import dataclass
from enum import Enum


class ModeKind(str, Enum):
    """Mutually exclusive interaction modes."""

    NORMAL = "normal"
    SEARCHING = "searching"
    SHOWING_ABOUT = "showing_about"
    CONFIRMING_PURGE = "confirming_purge"
    PICKING_COLOR = "picking_color"


MODAL_KINDS = frozenset({
    ModeKind.SHOWING_ABOUT,
    ModeKind.CONFIRMING_PURGE,
    ModeKind.PICKING_COLOR,
})


@dataclass(frozen=True)
class Mode:
    """Current interaction mode; ``term`` is only meaningful while searching."""

    kind: ModeKind = ModeKind.NORMAL
    term: str = ""

    @property
    def is_modal(self) -> bool:
        return self.kind in MODAL_KINDS

    @classmethod
    def searching(cls, term: str = "") -> "Mode":
        return cls(ModeKind.SEARCHING, term)


NORMAL = Mode()


class Layout(str, Enum):
    """Screen layout class derived from the available width."""

    NARROW = "narrow"  # Menu-driven panels; modals force the menu state
    WIDE = "wide"      # Menu and modal overlays coexist


class FocusTarget(str, Enum):
    """Named controls that can receive focus side effects."""

    DRAFT_EDITOR = "draft-editor"
    SEARCH_INPUT = "search-input"
    ABOUT_CLOSE = "about-close"
    PURGE_CANCEL = "purge-cancel"
    COLOR_CLOSE = "color-close"
