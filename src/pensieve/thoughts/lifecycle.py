"""Thought lifecycle state machine.

Owns the single in-progress draft and the committed history, and decides
when a draft becomes a thought:
- on an explicit save
- when the autosave probe finds the draft idle past the stale threshold
- never on purge (the draft is discarded)

Committing trims the text; a blank draft is discarded silently but the
draft is still reset. The committed thought keeps the time its draft was
started, not the commit time.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from .models import Draft, TimestampedThought

STALE_THRESHOLD_MS = 300_000  # Idle time before a draft is autosaved
AUTOSAVE_PROBE_MS = 15_000  # How often the idle check runs

CommitListener = Callable[[TimestampedThought, list[TimestampedThought]], None]
PurgeListener = Callable[[], None]


class NewDraftPolicy(str, Enum):
    """What "new thought" does while a draft is already in progress."""

    KEEP = "keep"        # Idempotent: the in-progress draft survives
    DISCARD = "discard"  # Replace the in-progress draft, dropping its text


class ThoughtLifecycle:
    """Single-draft editor with newest-first history.

    All operations are synchronous in-memory transitions driven by the
    caller, which supplies the current time in milliseconds.

    Example:
        lifecycle = ThoughtLifecycle()
        lifecycle.begin_draft(0)
        lifecycle.edit_draft(5, "  hello  ")
        lifecycle.commit(10)  # history == [("hello", 0)]
    """

    def __init__(
        self,
        history: list[TimestampedThought] | None = None,
        *,
        stale_threshold_ms: int = STALE_THRESHOLD_MS,
        new_draft_policy: NewDraftPolicy = NewDraftPolicy.KEEP,
        always_draft: bool = False,
        now: int = 0,
    ) -> None:
        self._history: list[TimestampedThought] = list(history or [])
        self._stale_threshold_ms = stale_threshold_ms
        self._new_draft_policy = new_draft_policy
        self._draft: Draft | None = Draft.fresh(now) if always_draft else None
        self._current_time = now
        self._commit_listeners: list[CommitListener] = []
        self._purge_listeners: list[PurgeListener] = []
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for lifecycle tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Lifecycle", message)

    def add_commit_listener(self, listener: CommitListener) -> None:
        """Register a listener called after each commit that changed history."""
        self._commit_listeners.append(listener)

    def add_purge_listener(self, listener: PurgeListener) -> None:
        """Register a listener called after each purge."""
        self._purge_listeners.append(listener)

    @property
    def draft(self) -> Draft | None:
        return self._draft

    @property
    def history(self) -> list[TimestampedThought]:
        """Committed thoughts, newest first (a copy)."""
        return list(self._history)

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def stale_threshold_ms(self) -> int:
        return self._stale_threshold_ms

    @property
    def new_draft_policy(self) -> NewDraftPolicy:
        return self._new_draft_policy

    def restore(self, history: list[TimestampedThought]) -> None:
        """Replace history with previously persisted thoughts.

        Used when the notebook is opened or the signed-in user changes;
        listeners are not notified.
        """
        self._history = list(history)

    def begin_draft(self, now: int) -> bool:
        """Start a new draft.

        With the ``keep`` policy an in-progress draft is left untouched.
        With ``discard`` it is replaced without being committed.

        Returns:
            True if a fresh draft was created
        """
        if self._draft is not None and self._new_draft_policy == NewDraftPolicy.KEEP:
            self._debug("debug", "New draft ignored: a draft is already in progress")
            return False

        if self._draft is not None and not self._draft.is_blank:
            self._debug("warning", "Discarding in-progress draft for a new one")
        self._draft = Draft.fresh(now)
        return True

    def edit_draft(self, now: int, text: str) -> bool:
        """Replace the draft text and refresh its idle timestamp.

        Returns:
            False (no-op) if no draft is in progress
        """
        if self._draft is None:
            self._debug("debug", "Edit ignored: no draft in progress")
            return False

        self._draft.text = text
        self._draft.last_edited_at = now
        return True

    def is_stale(self, now: int) -> bool:
        """Whether the draft has been idle for longer than the threshold."""
        if self._draft is None:
            return False
        return now - self._draft.last_edited_at > self._stale_threshold_ms

    def tick(self, now: int) -> bool:
        """Advance the clock and autosave an idle draft.

        Returns:
            True if the tick committed the draft
        """
        self._current_time = now
        if not self.is_stale(now):
            return False

        if self._draft.is_blank:
            self.commit(now)
            return False

        self._debug("info", "Draft idle past threshold, autosaving")
        self.commit(now)
        return True

    def commit(self, now: int) -> list[TimestampedThought]:
        """Move the draft's trimmed text into history and reset the draft.

        Blank drafts are discarded. The committed thought is stamped with
        the time the draft was started.

        Returns:
            The history after the commit, newest first
        """
        draft = self._draft
        self._draft = Draft.fresh(now)

        if draft is None or draft.is_blank:
            self._debug("debug", "Blank draft discarded")
            return self.history

        thought = TimestampedThought(thought=draft.text, created_at=draft.started_at)
        self._history.insert(0, thought)
        self._debug("info", f"Committed thought ({len(thought.thought)} chars)")

        history = self.history
        for listener in self._commit_listeners:
            listener(thought, history)
        return history

    def save_and_start_new(self, now: int) -> list[TimestampedThought]:
        """Commit the draft and leave a fresh one ready for the next thought.

        Used by the explicit save command, so the editor never ends up
        without a draft regardless of the new-draft policy.
        """
        return self.commit(now)

    def discard_draft(self, now: int) -> None:
        """Drop the draft without committing it and start a fresh one."""
        if self._draft is not None and not self._draft.is_blank:
            self._debug("warning", "In-progress draft discarded")
        self._draft = Draft.fresh(now)

    def purge(self, now: int) -> None:
        """Clear all history and discard the draft.

        Irreversible. Confirmation is the caller's responsibility.
        """
        self._history.clear()
        self._draft = Draft.fresh(now)
        self._debug("warning", "History purged")
        for listener in self._purge_listeners:
            listener()
