"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to the notebook.
The notebook owns all state; widgets are redrawn from it after each action.
"""

import asyncio
import contextlib

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Resize
from textual.widgets import Button, Footer, Header, Input, TextArea

from ..modes import FocusTarget, Layout, ModeKind
from ..notebook import Notebook
from .config import NOTIFY_LONG, NOTIFY_SHORT, LogLevel
from .screens import AboutScreen, ColorPickerScreen, PurgeScreen
from .styles import APP_CSS
from .themes import DEFAULT_COLOR, PALETTE, all_themes, theme_name
from .widgets import LogPanel, MenuPanel, ThoughtList


class PensieveApp(App):
    """Textual TUI for a pensieve notebook."""

    CSS = APP_CSS
    TITLE = "Pensieve"
    ENABLE_COMMAND_PALETTE = False

    # Priority bindings win over the editor's own keys; the notebook
    # ignores them while a modal is open.
    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+n", "new_thought", "New", priority=True),
        Binding("ctrl+f", "search", "Search", priority=True),
        Binding("ctrl+g", "toggle_menu", "Menu", priority=True),
        Binding("escape", "exit_search", "Done", show=False),
        Binding("f1", "about", "About"),
        Binding("f2", "color", "Colour"),
        Binding("f8", "purge", "Purge"),
        Binding("f12", "toggle_log", "Log"),
    ]

    def __init__(self, notebook: Notebook, log_level: str | None = None) -> None:
        super().__init__()
        self._notebook = notebook
        self._log_level = log_level

    @property
    def notebook(self) -> Notebook:
        return self._notebook

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Horizontal(id="main"):
            yield MenuPanel(id="menu")
            with Vertical(id="content"):
                yield Input(placeholder="Search thoughts", id=FocusTarget.SEARCH_INPUT.value)
                editor = TextArea(id=FocusTarget.DRAFT_EDITOR.value, show_line_numbers=False)
                editor.border_title = "New thought"
                yield editor
                yield ThoughtList(id="thoughts")

        yield LogPanel(id="log-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the notebook and start the autosave probe."""
        for theme in all_themes():
            self.register_theme(theme)

        log_panel = self._query("#log-panel", LogPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()

        self._notebook.set_debug_callback(log_panel.record)
        self._notebook.modes.set_focus_sink(self._focus_target)

        await self._notebook.open()
        self._apply_color(self._notebook.color)
        self._notebook.modes.resize(self.size.width)

        probe_seconds = self._notebook.config.autosave_probe_ms / 1000
        self.set_interval(probe_seconds, self._autosave_probe)

        self.sub_title = self._notebook.store.backend_type
        self._refresh_view()
        self._query(f"#{FocusTarget.DRAFT_EDITOR.value}", TextArea).focus()

    async def on_unmount(self) -> None:
        """Let outstanding writes finish before the store goes away."""
        await self._notebook.close()

    def _query(self, selector: str, expect_type=None):
        """Query the main screen, even while a modal is on top."""
        base = self.screen_stack[0]
        if expect_type is None:
            return base.query_one(selector)
        return base.query_one(selector, expect_type)

    def _log(self, level: str, message: str) -> None:
        self._query("#log-panel", LogPanel).record(level, "TUI", message)

    def _focus_target(self, target: FocusTarget) -> None:
        """Focus sink for the mode controller (deferred until after refresh)."""

        def _focus() -> None:
            with contextlib.suppress(NoMatches):
                self.screen.query_one(f"#{target.value}").focus()

        self.call_after_refresh(_focus)

    def _apply_color(self, color: str | None) -> None:
        name = color if color in PALETTE else DEFAULT_COLOR
        self.theme = theme_name(name)

    @property
    def _editor(self) -> TextArea:
        return self._query(f"#{FocusTarget.DRAFT_EDITOR.value}", TextArea)

    @property
    def _search_input(self) -> Input:
        return self._query(f"#{FocusTarget.SEARCH_INPUT.value}", Input)

    def _refresh_view(self) -> None:
        """Redraw every widget from notebook state."""
        notebook = self._notebook
        modes = notebook.modes

        main = self._query("#main")
        main.set_class(modes.layout == Layout.NARROW, "-narrow")
        main.set_class(modes.menu_open, "-menu-open")
        self._query("#menu", MenuPanel).set_open(modes.menu_open)

        search = self._search_input
        searching = modes.mode.kind == ModeKind.SEARCHING
        search.set_class(searching, "-active")
        search.disabled = not modes.accepts_search_input
        if not searching and search.value:
            search.value = ""

        editor = self._editor
        editor.disabled = not modes.accepts_draft_input
        if editor.text != notebook.draft_text:
            editor.text = notebook.draft_text

        self._query("#thoughts", ThoughtList).show_thoughts(
            notebook.visible_thoughts(),
            total=len(notebook.history),
            term=modes.search_term,
        )

    def _sync_draft(self) -> None:
        """Push editor text the notebook has not seen yet."""
        text = self._editor.text
        if text != self._notebook.draft_text:
            self._notebook.edit(text)

    def on_resize(self, event: Resize) -> None:
        self._notebook.modes.resize(event.size.width)
        self._refresh_view()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id != FocusTarget.DRAFT_EDITOR.value:
            return
        if event.text_area.text != self._notebook.draft_text:
            self._notebook.edit(event.text_area.text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != FocusTarget.SEARCH_INPUT.value:
            return
        if self._notebook.search(event.value):
            self._refresh_view()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "menu-new": self.action_new_thought,
            "menu-search": self.action_search,
            "menu-color": self.action_color,
            "menu-about": self.action_about,
            "menu-purge": self.action_purge,
        }
        action = actions.get(event.button.id or "")
        if action is not None:
            event.stop()
            action()

    def _autosave_probe(self) -> None:
        self._sync_draft()
        if self._notebook.autosave_probe():
            self._refresh_view()
            self.notify("Idle thought autosaved", timeout=NOTIFY_SHORT)

    def action_save(self) -> None:
        """Commit the draft and start the next one."""
        if not self._notebook.modes.accepts_draft_input:
            return
        self._sync_draft()
        before = len(self._notebook.history)
        self._notebook.save()
        self._refresh_view()
        if len(self._notebook.history) > before:
            self.notify("Thought saved", timeout=NOTIFY_SHORT)

    def action_new_thought(self) -> None:
        if not self._notebook.modes.accepts_draft_input:
            return
        self._sync_draft()
        if self._notebook.new_thought():
            self._refresh_view()
        self._editor.focus()

    def action_search(self) -> None:
        if self._notebook.modes.request_search():
            self._refresh_view()

    def action_exit_search(self) -> None:
        if self._notebook.modes.exit_search():
            self._refresh_view()

    def action_toggle_menu(self) -> None:
        if self._notebook.modes.toggle_menu():
            self._refresh_view()

    def action_about(self) -> None:
        if self._notebook.modes.request_about():
            self._refresh_view()
            self.push_screen(AboutScreen(), self._on_about_closed)

    def action_purge(self) -> None:
        if self._notebook.modes.request_purge_confirm():
            self._refresh_view()
            self.push_screen(PurgeScreen(len(self._notebook.history)), self._on_purge_closed)

    def action_color(self) -> None:
        if self._notebook.modes.request_color_picker():
            self._refresh_view()
            self.push_screen(ColorPickerScreen(self._notebook.color), self._on_color_closed)

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self._query("#log-panel", LogPanel).toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_SHORT)

    def _on_about_closed(self, _result: None) -> None:
        self._notebook.modes.dismiss()
        self._refresh_view()

    def _on_purge_closed(self, result: str | None) -> None:
        if result == "purge" and self._notebook.confirm_purge():
            self._apply_color(None)
            self.notify("All thoughts purged", severity="warning", timeout=NOTIFY_LONG)
        else:
            self._notebook.modes.dismiss()
        self._refresh_view()

    def _on_color_closed(self, result: str | None) -> None:
        if result in PALETTE:
            self._notebook.choose_color(result)
            self._apply_color(result)
            self._log("info", f"Colour set to {result}")
        else:
            self._notebook.modes.dismiss()
        self._refresh_view()


async def run_textual_tui(notebook: Notebook, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        notebook: Notebook to edit (opened and closed by the app)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = PensieveApp(notebook, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
