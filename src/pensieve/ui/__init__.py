"""Terminal UI module for pensieve.

Provides a Textual-based TUI for writing and browsing thoughts.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (thought list, menu, log rendering)
- styles.py: CSS styling (layout decisions)
- themes.py: Colour palette and theme construction
- screens.py: Modal dialogs (about, purge confirmation, colour picker)
- app.py: Application orchestration (user interaction flow)
"""

from .app import PensieveApp, run_textual_tui
from .config import LogLevel
from .themes import DEFAULT_COLOR, PALETTE
from .widgets import LogPanel, MenuPanel, ThoughtEntry, ThoughtList

__all__ = [
    "DEFAULT_COLOR",
    "LogLevel",
    "LogPanel",
    "MenuPanel",
    "PALETTE",
    "PensieveApp",
    "ThoughtEntry",
    "ThoughtList",
    "run_textual_tui",
]
