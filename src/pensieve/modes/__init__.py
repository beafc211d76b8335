"""Interaction mode module for pensieve.

Keeps search, about, purge confirmation and colour picking mutually
exclusive and gates which inputs reach the thought lifecycle.
"""

from .controller import NARROW_BREAKPOINT, ModeController, layout_for_width
from .models import MODAL_KINDS, NORMAL, FocusTarget, Layout, Mode, ModeKind

__all__ = [
    "FocusTarget",
    "Layout",
    "MODAL_KINDS",
    "Mode",
    "ModeController",
    "ModeKind",
    "NARROW_BREAKPOINT",
    "NORMAL",
    "layout_for_width",
]
