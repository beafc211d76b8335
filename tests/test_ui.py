"""Headless tests for the Textual TUI."""
import pytest
from textual.widgets import TextArea

from pensieve.modes import ModeKind
from pensieve.storage import InMemoryHistoryStore
from pensieve.thoughts import TimestampedThought
from pensieve.ui import PensieveApp
from pensieve.ui.screens import ColorPickerScreen, PurgeScreen
from pensieve.ui.widgets import LogPanel, ThoughtList


@pytest.fixture
def store():
    return InMemoryHistoryStore(
        [TimestampedThought(thought="Buy milk", created_at=2),
         TimestampedThought(thought="Call mum", created_at=1)]
    )


class TestPensieveApp:
    """Pilot-driven tests for the main application."""

    @pytest.mark.asyncio
    async def test_loads_and_saves(self, make_notebook, store):
        """Test typing a thought and saving it."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert len(app.screen_stack[0].query_one("#thoughts", ThoughtList).shown) == 2

            await pilot.press("h", "i")
            await pilot.press("ctrl+s")
            await pilot.pause()

            assert [t.thought for t in notebook.history] == ["hi", "Buy milk", "Call mum"]
            assert app.screen_stack[0].query_one("#draft-editor", TextArea).text == ""
            assert len(app.screen_stack[0].query_one("#thoughts", ThoughtList).shown) == 3

        await notebook.flush()
        assert [t.thought for t in await store.load_history()][0] == "hi"

    @pytest.mark.asyncio
    async def test_search_filters_list(self, make_notebook, store):
        """Test entering and leaving search."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            await pilot.press("ctrl+f")
            await pilot.pause()
            assert notebook.modes.mode.kind == ModeKind.SEARCHING

            await pilot.press("m", "u", "m")
            await pilot.pause()
            shown = app.screen_stack[0].query_one("#thoughts", ThoughtList).shown
            assert [t.thought for t in shown] == ["Call mum"]

            await pilot.press("escape")
            await pilot.pause()
            assert notebook.modes.mode.kind == ModeKind.NORMAL
            assert len(app.screen_stack[0].query_one("#thoughts", ThoughtList).shown) == 2

    @pytest.mark.asyncio
    async def test_purge_cancel_then_confirm(self, make_notebook, store):
        """Test the purge confirmation dialog."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            await pilot.press("f8")
            await pilot.pause()
            assert isinstance(app.screen, PurgeScreen)
            assert notebook.modes.mode.kind == ModeKind.CONFIRMING_PURGE
            assert app.screen_stack[0].query_one("#draft-editor", TextArea).disabled

            await pilot.press("escape")
            await pilot.pause()
            assert notebook.modes.mode.kind == ModeKind.NORMAL
            assert len(notebook.history) == 2

            await pilot.press("f8")
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
            assert notebook.history == []
            assert notebook.modes.mode.kind == ModeKind.NORMAL

        await notebook.flush()
        assert await store.load_history() == []

    @pytest.mark.asyncio
    async def test_colour_picker(self, make_notebook, store):
        """Test choosing a colour from the palette."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            await pilot.press("f2")
            await pilot.pause()
            assert isinstance(app.screen, ColorPickerScreen)

            await pilot.click("#palette-green")
            await pilot.pause()
            assert notebook.color == "green"
            assert app.theme == "pensieve-green"
            assert notebook.modes.mode.kind == ModeKind.NORMAL

        await notebook.flush()
        assert await store.load_color() == "green"

    @pytest.mark.asyncio
    async def test_narrow_menu(self, make_notebook, store):
        """Test that the menu follows modals on narrow terminals."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(60, 30)) as pilot:
            await pilot.pause()
            assert not notebook.modes.menu_open

            await pilot.press("f1")
            await pilot.pause()
            assert notebook.modes.menu_open
            assert app.screen_stack[0].query_one("#main").has_class("-menu-open")

            await pilot.press("escape")
            await pilot.pause()
            assert notebook.modes.mode.kind == ModeKind.NORMAL

    @pytest.mark.asyncio
    async def test_log_panel_toggle(self, make_notebook, store):
        """Test showing the log panel."""
        notebook = make_notebook(store)
        app = PensieveApp(notebook)

        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            panel = app.screen_stack[0].query_one("#log-panel", LogPanel)
            assert not panel.display

            await pilot.press("f12")
            await pilot.pause()
            assert panel.display
