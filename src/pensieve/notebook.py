"""Notebook orchestration.

Wires the thought lifecycle, the mode controller and a history store into
one object the TUI and CLI drive. Hides:
- Which inputs are gated by the current mode
- How commits become fire-and-forget persistence writes
- Startup loading, welcome seeding and user switching
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

from .config import PensieveConfig
from .modes import ModeController, ModeKind
from .storage import DocumentHistoryStore, HistoryStore
from .thoughts import ThoughtLifecycle, TimestampedThought, now_millis

WELCOME_THOUGHT = (
    "Welcome to Pensieve. Type a thought below; it saves itself after five "
    "idle minutes, or press ctrl+s to save it right away."
)

Clock = Callable[[], int]


class Notebook:
    """A user's notebook: one draft, a newest-first history, one store.

    Persistence writes run as background asyncio tasks, one at a time in
    commit order. A failed write never changes in-memory state; it is
    counted and reported through the debug callback.

    Example:
        notebook = Notebook(create_history_store("json", path="thoughts.json"))
        await notebook.open()
        notebook.edit("remember the milk")
        notebook.save()
        await notebook.close()
    """

    def __init__(
        self,
        store: HistoryStore,
        config: PensieveConfig | None = None,
        *,
        clock: Clock = now_millis,
        width: int | None = None,
    ) -> None:
        self._config = config or PensieveConfig()
        self._store = store
        self._clock = clock
        self._lifecycle = ThoughtLifecycle(
            stale_threshold_ms=self._config.stale_threshold_ms,
            new_draft_policy=self._config.new_draft_policy,
            always_draft=True,
            now=clock(),
        )
        self._modes = ModeController(
            width if width is not None else self._config.narrow_width,
            narrow_breakpoint=self._config.narrow_width,
        )
        self._color: str | None = None
        self._pending: set[asyncio.Task] = set()
        self._write_lock = asyncio.Lock()
        self._debug_callback: Any | None = None
        self.failed_writes = 0
        self.last_write_error: BaseException | None = None

        self._lifecycle.add_commit_listener(self._on_commit)
        self._lifecycle.add_purge_listener(self._on_purge)

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback and propagate it to all components.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._lifecycle.set_debug_callback(callback)
        self._modes.set_debug_callback(callback)
        self._store.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Notebook", message)

    @property
    def lifecycle(self) -> ThoughtLifecycle:
        return self._lifecycle

    @property
    def modes(self) -> ModeController:
        return self._modes

    @property
    def store(self) -> HistoryStore:
        return self._store

    @property
    def config(self) -> PensieveConfig:
        return self._config

    @property
    def color(self) -> str | None:
        return self._color

    @property
    def history(self) -> list[TimestampedThought]:
        return self._lifecycle.history

    @property
    def draft_text(self) -> str:
        draft = self._lifecycle.draft
        return draft.text if draft else ""

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def visible_thoughts(self) -> list[TimestampedThought]:
        """History as currently displayed (search-filtered)."""
        return self._modes.visible(self._lifecycle.history)

    async def open(self) -> None:
        """Connect the store and load the prior history and colour."""
        await self._store.connect()
        await self._load()

    async def _load(self) -> None:
        history = await self._store.load_history()
        if not history and self._config.seed_welcome:
            history = [TimestampedThought(thought=WELCOME_THOUGHT, created_at=self._clock())]
            self._debug("info", "Seeded welcome thought")
        self._lifecycle.restore(history)
        self._color = await self._store.load_color()
        self._debug("info", f"Loaded {len(history)} thought(s) from {self._store.backend_type}")

    async def close(self) -> None:
        """Wait for outstanding writes and disconnect the store."""
        await self.flush()
        await self._store.disconnect()

    async def flush(self) -> None:
        """Wait until every scheduled write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def switch_user(self, user_id: str | None) -> None:
        """Follow a sign-in/sign-out on the document backend.

        This is the hook for an external authentication integration: the
        TUI and CLI pick the user once from PENSIEVE_USER_ID, and an auth
        provider reporting a login, logout or account change calls this
        to flush pending writes and reload the new user's notebook.

        Raises:
            TypeError: If the store is not per-user
        """
        if not isinstance(self._store, DocumentHistoryStore):
            raise TypeError(f"{self._store.backend_type} store has no users")

        await self.flush()
        await self._store.set_user(user_id)
        now = self._clock()
        if user_id:
            await self._load()
        else:
            self._lifecycle.restore([])
            self._color = None
        self._lifecycle.discard_draft(now)

    def _schedule(self, description: str, factory: Callable[[], Coroutine[Any, Any, None]]) -> None:
        """Run a store write in the background, serialized with other writes."""

        async def _run() -> None:
            async with self._write_lock:
                await factory()

        task = asyncio.get_running_loop().create_task(_run())
        self._pending.add(task)
        task.add_done_callback(lambda t: self._write_done(description, t))

    def _write_done(self, description: str, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            self._debug("warning", f"{description} cancelled")
            return
        error = task.exception()
        if error is not None:
            self.failed_writes += 1
            self.last_write_error = error
            self._debug("error", f"{description} failed: {error}")

    def _on_commit(
        self,
        thought: TimestampedThought,
        history: list[TimestampedThought]
    ) -> None:
        self._schedule("History write", lambda: self._store.record_commit(thought, history))

    def _on_purge(self) -> None:
        self._schedule("Purge", self._store.purge)

    def _gated(self, action: str) -> bool:
        if self._modes.accepts_draft_input:
            return False
        self._debug("debug", f"{action} ignored while {self._modes.mode.kind.value}")
        return True

    def new_thought(self) -> bool:
        """Start a new draft (policy decides what happens to an open one)."""
        if self._gated("New thought"):
            return False
        return self._lifecycle.begin_draft(self._clock())

    def edit(self, text: str) -> bool:
        """Replace the draft text."""
        if self._gated("Edit"):
            return False
        return self._lifecycle.edit_draft(self._clock(), text)

    def save(self) -> list[TimestampedThought]:
        """Commit the draft and start a new one."""
        if self._gated("Save"):
            return self._lifecycle.history
        return self._lifecycle.save_and_start_new(self._clock())

    def autosave_probe(self) -> bool:
        """Periodic idle check; commits a draft idle past the threshold."""
        return self._lifecycle.tick(self._clock())

    def search(self, term: str) -> bool:
        return self._modes.update_search_term(term)

    def confirm_purge(self) -> bool:
        """Purge everything; only valid while confirming a purge."""
        if self._modes.mode.kind != ModeKind.CONFIRMING_PURGE:
            self._debug("warning", "Purge ignored: not confirmed")
            return False
        self._lifecycle.purge(self._clock())
        self._color = None
        self._modes.dismiss()
        return True

    def choose_color(self, color: str) -> None:
        """Set and persist the theme colour choice."""
        self._color = color
        self._schedule("Colour write", lambda: self._store.save_color(color))
        if self._modes.mode.kind == ModeKind.PICKING_COLOR:
            self._modes.dismiss()

