"""Modal screens for the TUI.

This module hides the design decisions about:
- Dialog appearance (CSS, layout)
- Button styling and variants
- Keyboard shortcuts for dialogs

Each screen dismisses with a result the app hands back to the notebook:
the about screen returns nothing, the purge screen returns "purge" or
"cancel", the colour picker returns a palette name or None.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from ..modes import FocusTarget
from .themes import PALETTE

DIALOG_CSS = """
{name} {{
    align: center middle;
    background: $background 70%;
}}

{name} .dialog {{
    width: 64;
    height: auto;
    max-height: 24;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}}

{name} .dialog-title {{
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $accent;
    padding: 0 0 1 0;
    border-bottom: solid $border;
    margin-bottom: 1;
}}

{name} .dialog-body {{
    width: 100%;
    height: auto;
    padding: 0 1;
    color: $foreground;
    margin-bottom: 1;
}}

{name} .dialog-buttons {{
    width: 100%;
    height: 3;
    align: center middle;
}}

{name} .dialog-buttons Button {{
    margin: 0 1;
    min-width: 10;
}}
"""

ABOUT_TEXT = (
    "Pensieve keeps a running list of your thoughts, newest first.\n\n"
    "Type in the editor. A thought is saved when you press ctrl+s, or on "
    "its own after five idle minutes. Empty thoughts are never saved.\n\n"
    "ctrl+f searches, ctrl+g opens the menu, F2 picks a colour, "
    "F8 purges everything. Click a thought to copy it."
)


class AboutScreen(ModalScreen[None]):
    """What the app does and how to drive it."""

    CSS = DIALOG_CSS.format(name="AboutScreen")

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static("About Pensieve", classes="dialog-title")
            yield Static(ABOUT_TEXT, classes="dialog-body", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", id=FocusTarget.ABOUT_CLOSE.value, variant="primary")

    def on_mount(self) -> None:
        self.query_one(f"#{FocusTarget.ABOUT_CLOSE.value}", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class PurgeScreen(ModalScreen[str]):
    """Confirmation before deleting every thought."""

    CSS = DIALOG_CSS.format(name="PurgeScreen")

    BINDINGS = [
        Binding("y", "confirm", "Purge", show=False),
        Binding("n", "cancel", "Cancel", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, count: int) -> None:
        super().__init__()
        self._count = count

    def compose(self) -> ComposeResult:
        noun = "thought" if self._count == 1 else "thoughts"
        with Vertical(classes="dialog"):
            yield Static("Purge all thoughts?", classes="dialog-title")
            yield Static(
                f"This permanently deletes {self._count} {noun} and your colour "
                "choice. It cannot be undone.",
                classes="dialog-body",
            )
            with Horizontal(classes="dialog-buttons"):
                yield Button("Cancel", id=FocusTarget.PURGE_CANCEL.value, variant="primary")
                yield Button("Purge", id="purge-confirm", variant="error")

    def on_mount(self) -> None:
        self.query_one(f"#{FocusTarget.PURGE_CANCEL.value}", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "purge-confirm":
            self.dismiss("purge")
        else:
            self.dismiss("cancel")

    def action_confirm(self) -> None:
        self.dismiss("purge")

    def action_cancel(self) -> None:
        self.dismiss("cancel")


class ColorPickerScreen(ModalScreen[str | None]):
    """Grid of palette colours."""

    CSS = DIALOG_CSS.format(name="ColorPickerScreen") + """
    ColorPickerScreen .palette {
        grid-size: 3;
        grid-gutter: 1;
        height: auto;
        margin-bottom: 1;
    }

    ColorPickerScreen .palette Button {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
    ]

    def __init__(self, current: str | None = None) -> None:
        super().__init__()
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static("Pick a colour", classes="dialog-title")
            with Grid(classes="palette"):
                for name, hex_value in PALETTE.items():
                    label = f"[{hex_value}]■[/] {name}"
                    if name == self._current:
                        label += " ✓"
                    yield Button(label, id=f"palette-{name}")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Close", id=FocusTarget.COLOR_CLOSE.value, variant="primary")

    def on_mount(self) -> None:
        self.query_one(f"#{FocusTarget.COLOR_CLOSE.value}", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("palette-"):
            self.dismiss(button_id[len("palette-"):])
        else:
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
