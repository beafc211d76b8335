"""Pytest configuration and shared fixtures."""
import pytest

from pensieve.config import PensieveConfig
from pensieve.notebook import Notebook
from pensieve.storage import HistoryStore, InMemoryHistoryStore
from pensieve.thoughts import TimestampedThought


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> int:
        self.now += millis
        return self.now


class FailingStore(InMemoryHistoryStore):
    """In-memory store whose writes always fail."""

    async def write_history(self, history: list[TimestampedThought]) -> None:
        raise OSError("disk full")

    async def purge(self) -> None:
        raise OSError("disk full")


class LogCollector:
    """Debug callback recording (level, component, message) tuples."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str, str]] = []

    def __call__(self, level: str, component: str, message: str) -> None:
        self.entries.append((level, component, message))

    def levels(self, component: str | None = None) -> list[str]:
        return [
            level for level, comp, _ in self.entries
            if component is None or comp == component
        ]


@pytest.fixture
def clock():
    """Return a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def log():
    """Return a debug callback that records messages."""
    return LogCollector()


@pytest.fixture
def memory_store():
    """Return an empty in-memory store."""
    return InMemoryHistoryStore()


@pytest.fixture
def failing_store():
    """Return a store whose writes always fail."""
    return FailingStore()


@pytest.fixture
def config():
    """Return a config without welcome seeding."""
    return PensieveConfig(backend="memory", seed_welcome=False)


@pytest.fixture
def make_notebook(clock, log, config):
    """Factory for notebooks sharing the fake clock and log collector."""

    def _make(store: HistoryStore | None = None, **overrides) -> Notebook:
        cfg = config.model_copy(update=overrides) if overrides else config
        notebook = Notebook(store or InMemoryHistoryStore(), cfg, clock=clock, width=120)
        notebook.set_debug_callback(log)
        return notebook

    return _make
