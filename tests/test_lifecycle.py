"""Unit and property-based tests for the thought lifecycle."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from pensieve.thoughts import (
    STALE_THRESHOLD_MS,
    Draft,
    NewDraftPolicy,
    ThoughtLifecycle,
    TimestampedThought,
    ThoughtRecord,
    parse_history,
)


class TestTimestampedThought:
    """Tests for the committed thought model."""

    def test_text_is_trimmed(self):
        """Test that surrounding whitespace is removed."""
        thought = TimestampedThought(thought="  hello world \n", created_at=5)
        assert thought.thought == "hello world"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_text_is_rejected(self, text):
        """Test that a thought can never be blank."""
        with pytest.raises(ValueError):
            TimestampedThought(thought=text, created_at=0)

    def test_is_immutable(self):
        """Test that committed thoughts cannot be changed."""
        thought = TimestampedThought(thought="fixed", created_at=1)
        with pytest.raises(ValueError):
            thought.thought = "changed"  # type: ignore[misc]

    def test_record_format(self):
        """Test the serialized record shape."""
        thought = TimestampedThought(thought="note", created_at=1_700_000_000_000)
        assert thought.to_record().model_dump() == {
            "thought": "note",
            "time": 1_700_000_000_000,
        }
        assert TimestampedThought.from_record(ThoughtRecord(thought="note", time=7)).created_at == 7


class TestParseHistory:
    """Tests for init/persisted payload parsing."""

    @pytest.mark.parametrize("payload", [None, {}, "thoughts", 42])
    def test_malformed_payload_is_empty(self, payload):
        """Test that a non-list payload yields an empty history."""
        assert parse_history(payload) == []

    def test_bad_entries_are_skipped(self):
        """Test that only well-formed, non-blank records survive."""
        payload = [
            {"thought": "newest", "time": 30},
            {"thought": "   ", "time": 20},
            {"thought": "no time"},
            {"thought": "string time", "time": "10"},
            "not a record",
            {"thought": "oldest", "time": 5},
        ]
        history = parse_history(payload)
        assert [t.thought for t in history] == ["newest", "oldest"]
        assert [t.created_at for t in history] == [30, 5]


class TestLifecycleScenario:
    """The documented commit scenario."""

    def test_commit_then_empty_commit(self):
        """Test trimming, start-time stamping and empty discard."""
        lifecycle = ThoughtLifecycle()
        lifecycle.begin_draft(0)
        lifecycle.edit_draft(0, "  hello world  ")

        history = lifecycle.commit(10)
        assert history == [TimestampedThought(thought="hello world", created_at=0)]
        assert lifecycle.draft == Draft(text="", last_edited_at=10, started_at=10)

        lifecycle.edit_draft(20, "")
        history = lifecycle.commit(30)
        assert len(history) == 1
        assert lifecycle.draft.text == ""
        assert lifecycle.draft.last_edited_at == 30


class TestDrafts:
    """Tests for draft creation and editing."""

    def test_no_draft_by_default(self):
        """Test that drafts are optional unless always_draft is set."""
        assert ThoughtLifecycle().draft is None
        assert ThoughtLifecycle(always_draft=True, now=3).draft == Draft.fresh(3)

    def test_edit_without_draft_is_noop(self, log):
        """Test that editing with no draft does nothing but is observable."""
        lifecycle = ThoughtLifecycle()
        lifecycle.set_debug_callback(log)

        assert lifecycle.edit_draft(5, "lost") is False
        assert lifecycle.draft is None
        assert log.levels("Lifecycle") == ["debug"]

    def test_edit_keeps_start_time(self):
        """Test that edits refresh idle time but not the start time."""
        lifecycle = ThoughtLifecycle()
        lifecycle.begin_draft(100)
        lifecycle.edit_draft(250, "a")
        lifecycle.edit_draft(400, "ab")

        assert lifecycle.draft.started_at == 100
        assert lifecycle.draft.last_edited_at == 400
        assert lifecycle.commit(500)[0].created_at == 100

    def test_begin_draft_keep_policy_is_idempotent(self):
        """Test that a second new-thought request keeps unsaved text."""
        lifecycle = ThoughtLifecycle(new_draft_policy=NewDraftPolicy.KEEP)
        assert lifecycle.begin_draft(0) is True
        lifecycle.edit_draft(1, "unsaved")

        assert lifecycle.begin_draft(2) is False
        assert lifecycle.draft.text == "unsaved"
        assert lifecycle.draft.started_at == 0

    def test_begin_draft_discard_policy_replaces(self):
        """Test that the discard policy drops in-progress text."""
        lifecycle = ThoughtLifecycle(new_draft_policy=NewDraftPolicy.DISCARD)
        lifecycle.begin_draft(0)
        lifecycle.edit_draft(1, "dropped")

        assert lifecycle.begin_draft(2) is True
        assert lifecycle.draft == Draft.fresh(2)
        assert lifecycle.history == []

    def test_discard_draft(self):
        """Test dropping a draft without committing."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        lifecycle.edit_draft(1, "never mind")
        lifecycle.discard_draft(2)

        assert lifecycle.draft == Draft.fresh(2)
        assert lifecycle.history == []


class TestCommit:
    """Tests for committing drafts."""

    def test_commit_without_draft_starts_one(self):
        """Test that committing with no draft leaves an empty draft."""
        lifecycle = ThoughtLifecycle()
        assert lifecycle.commit(7) == []
        assert lifecycle.draft == Draft.fresh(7)

    def test_newest_first(self):
        """Test that commits are prepended."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        for now, text in [(10, "first"), (20, "second"), (30, "third")]:
            lifecycle.edit_draft(now, text)
            lifecycle.commit(now)

        assert [t.thought for t in lifecycle.history] == ["third", "second", "first"]

    def test_listeners_only_see_real_commits(self):
        """Test that blank commits do not trigger persistence."""
        calls = []
        lifecycle = ThoughtLifecycle(always_draft=True)
        lifecycle.add_commit_listener(lambda thought, history: calls.append((thought, history)))

        lifecycle.commit(1)
        lifecycle.edit_draft(2, "kept")
        lifecycle.commit(3)

        assert len(calls) == 1
        thought, history = calls[0]
        assert thought.thought == "kept"
        assert history == lifecycle.history

    def test_history_property_is_a_copy(self):
        """Test that callers cannot mutate history."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        lifecycle.edit_draft(1, "x")
        lifecycle.commit(2)

        lifecycle.history.clear()
        assert len(lifecycle.history) == 1

    def test_save_and_start_new(self):
        """Test that save leaves a fresh draft ready."""
        lifecycle = ThoughtLifecycle(new_draft_policy=NewDraftPolicy.DISCARD)
        lifecycle.begin_draft(0)
        lifecycle.edit_draft(5, "saved")

        history = lifecycle.save_and_start_new(9)
        assert [t.thought for t in history] == ["saved"]
        assert lifecycle.draft == Draft.fresh(9)

    def test_restore_does_not_notify(self):
        """Test that restoring persisted history is not a commit."""
        calls = []
        lifecycle = ThoughtLifecycle()
        lifecycle.add_commit_listener(lambda thought, history: calls.append(thought))
        lifecycle.restore([TimestampedThought(thought="old", created_at=1)])

        assert [t.thought for t in lifecycle.history] == ["old"]
        assert calls == []

    @given(st.text())
    def test_trim_or_discard(self, text: str):
        """Property test: an entry is added iff the trimmed text is non-empty."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        lifecycle.edit_draft(1, text)
        history = lifecycle.commit(2)

        if text.strip():
            assert len(history) == 1
            assert history[0].thought == text.strip()
        else:
            assert history == []

    @given(st.lists(st.text(max_size=20), max_size=15))
    def test_order_and_count(self, texts: list[str]):
        """Property test: history is newest first with one entry per non-blank commit."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        now = 0
        for text in texts:
            now += 10
            lifecycle.edit_draft(now, text)
            now += 10
            lifecycle.commit(now)

        history = lifecycle.history
        assert len(history) == sum(1 for text in texts if text.strip())
        for newer, older in zip(history, history[1:]):
            assert newer.created_at >= older.created_at

    @given(st.lists(st.sampled_from(["", " ", "\n", "\t  "]), min_size=1, max_size=10))
    def test_blank_commits_are_idempotent(self, blanks: list[str]):
        """Property test: blank commits never grow history and leave an empty draft."""
        lifecycle = ThoughtLifecycle()
        lifecycle.restore([TimestampedThought(thought="existing", created_at=0)])
        for i, blank in enumerate(blanks):
            lifecycle.edit_draft(i, blank)
            lifecycle.commit(i)
            assert len(lifecycle.history) == 1
            assert lifecycle.draft is not None
            assert lifecycle.draft.text == ""


class TestAutosave:
    """Tests for idle detection."""

    def _started(self, text: str = "idle thought") -> ThoughtLifecycle:
        lifecycle = ThoughtLifecycle()
        lifecycle.begin_draft(0)
        lifecycle.edit_draft(0, text)
        return lifecycle

    def test_tick_before_threshold_does_not_commit(self):
        """Test that an idle draft survives just under the threshold."""
        lifecycle = self._started()
        assert lifecycle.tick(STALE_THRESHOLD_MS - 1) is False
        assert lifecycle.history == []
        assert lifecycle.current_time == STALE_THRESHOLD_MS - 1

    def test_tick_at_threshold_does_not_commit(self):
        """Test that the threshold itself is not yet stale."""
        lifecycle = self._started()
        assert lifecycle.tick(STALE_THRESHOLD_MS) is False

    def test_tick_past_threshold_commits(self):
        """Test that a draft idle past the threshold is autosaved."""
        lifecycle = self._started()
        assert lifecycle.tick(STALE_THRESHOLD_MS + 1) is True
        assert lifecycle.history == [TimestampedThought(thought="idle thought", created_at=0)]
        assert lifecycle.draft == Draft.fresh(STALE_THRESHOLD_MS + 1)

    def test_edits_postpone_autosave(self):
        """Test that each edit restarts the idle window."""
        lifecycle = self._started()
        lifecycle.edit_draft(200_000, "still typing")
        assert lifecycle.tick(STALE_THRESHOLD_MS + 1) is False
        assert lifecycle.tick(200_000 + STALE_THRESHOLD_MS + 1) is True

    def test_custom_threshold(self):
        """Test a configured stale threshold."""
        lifecycle = ThoughtLifecycle(stale_threshold_ms=1_000, always_draft=True)
        lifecycle.edit_draft(0, "quick")
        assert lifecycle.is_stale(1_001)
        assert lifecycle.tick(1_001) is True

    def test_blank_idle_draft_is_not_reported_as_saved(self):
        """Test that an idle empty draft resets without counting as a save."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        now = STALE_THRESHOLD_MS + 1

        assert lifecycle.tick(now) is False
        assert lifecycle.history == []
        assert lifecycle.draft == Draft.fresh(now)

    def test_no_draft_is_never_stale(self):
        """Test that ticks without a draft do nothing."""
        lifecycle = ThoughtLifecycle()
        assert lifecycle.tick(10 * STALE_THRESHOLD_MS) is False
        assert lifecycle.draft is None


class TestPurge:
    """Tests for purging."""

    @given(st.lists(st.text(min_size=1, max_size=10), max_size=8), st.text(max_size=10))
    def test_purge_resets_everything(self, texts: list[str], pending: str):
        """Property test: purge leaves empty history and a fresh draft."""
        lifecycle = ThoughtLifecycle(always_draft=True)
        for i, text in enumerate(texts):
            lifecycle.edit_draft(i, text)
            lifecycle.commit(i)
        lifecycle.edit_draft(100, pending)

        lifecycle.purge(200)
        assert lifecycle.history == []
        assert lifecycle.draft == Draft.fresh(200)

    def test_purge_notifies_listeners(self):
        """Test that purge requests a persistence purge."""
        calls = []
        lifecycle = ThoughtLifecycle()
        lifecycle.add_purge_listener(lambda: calls.append("purged"))
        lifecycle.purge(0)
        assert calls == ["purged"]
