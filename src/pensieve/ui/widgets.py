"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Thought rendering and copy-on-click
- Menu buttons
- Log rendering and level filtering
"""

from datetime import datetime

from textual.containers import Vertical, VerticalScroll
from textual.events import Click
from textual.widgets import Button, RichLog, Static

from ..thoughts import TimestampedThought
from .config import LOG_TIMESTAMP_FORMAT, THOUGHT_TIME_FORMAT, LogLevel


def format_thought_time(millis: int) -> str:
    """Format a creation time (ms since epoch) in local time."""
    return datetime.fromtimestamp(millis / 1000).strftime(THOUGHT_TIME_FORMAT)


class ThoughtEntry(Vertical):
    """A committed thought that copies its text when clicked.

    Uses pyperclip for the system clipboard, falling back to Textual's
    OSC 52 support when no clipboard tool is available.
    """

    def __init__(self, thought: TimestampedThought, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._thought = thought

    def compose(self):
        yield Static(format_thought_time(self._thought.created_at), classes="thought-time")
        yield Static(self._thought.thought, classes="thought-text", markup=False)

    def on_click(self, event: Click) -> None:
        """Copy thought text to clipboard when clicked."""
        event.stop()
        try:
            import pyperclip
            pyperclip.copy(self._thought.thought)
            self.app.notify("Thought copied", timeout=2)
        except Exception:
            self.app.copy_to_clipboard(self._thought.thought)
            self.app.notify("Thought copied (terminal)", timeout=2)


class ThoughtList(VerticalScroll):
    """Scrollable newest-first list of committed thoughts."""

    BORDER_TITLE = "Thoughts"
    BORDER_SUBTITLE = ""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._shown: list[TimestampedThought] = []

    @property
    def shown(self) -> list[TimestampedThought]:
        return list(self._shown)

    def show_thoughts(
        self,
        thoughts: list[TimestampedThought],
        total: int,
        term: str = ""
    ) -> None:
        """Replace the displayed thoughts.

        Args:
            thoughts: Thoughts to display, newest first
            total: Size of the unfiltered history
            term: Active search term, if any
        """
        if thoughts and thoughts == self._shown:
            self._update_subtitle(total, term)
            return

        self._shown = list(thoughts)
        self.remove_children()
        if thoughts:
            self.mount_all(ThoughtEntry(thought, classes="thought") for thought in thoughts)
        else:
            message = f"Nothing matches “{term}”" if term else "No thoughts yet"
            self.mount(Static(message, classes="empty-thoughts", markup=False))
        self._update_subtitle(total, term)
        self.scroll_home(animate=False)

    def _update_subtitle(self, total: int, term: str) -> None:
        if term:
            self.border_subtitle = f"{len(self._shown)} of {total} match"
        else:
            self.border_subtitle = f"{total} thought{'s' if total != 1 else ''}"


class MenuPanel(Vertical):
    """Menu of notebook actions.

    Buttons post ``Button.Pressed``; the app maps their ids to actions.
    """

    BORDER_TITLE = "Menu"

    ITEMS = [
        ("menu-new", "New thought", "primary"),
        ("menu-search", "Search", "default"),
        ("menu-color", "Colour", "default"),
        ("menu-about", "About", "default"),
        ("menu-purge", "Purge", "error"),
    ]

    def compose(self):
        for button_id, label, variant in self.ITEMS:
            yield Button(label, id=button_id, variant=variant)

    def set_open(self, is_open: bool) -> None:
        self.set_class(is_open, "-open")


class LogPanel(RichLog):
    """Log panel for notebook tracing with level filtering.

    Shows timestamped messages from the lifecycle, mode controller,
    storage and UI. Hidden by default, shown with PENSIEVE_LOG_LEVEL or
    toggled with F12.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Notebook": "green",
        "Lifecycle": "bright_yellow",
        "Modes": "magenta",
        "Storage": "bright_blue",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: LogLevel = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> LogLevel:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {self._log_level.name}"
        else:
            self.border_subtitle = "Hidden"

    def record(self, level_str: str, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold.

        Matches the debug callback signature (level, component, message).
        """
        level = LogLevel.from_string(level_str)
        if level < self._log_level:
            return

        from rich.markup import escape

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level.name:<7}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
