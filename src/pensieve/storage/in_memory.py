"""In-memory history store.

Data is lost when the application exits.
"""

from ..thoughts import TimestampedThought
from .base import HistoryStore


class InMemoryHistoryStore(HistoryStore):
    """In-memory history store (session-only).

    Suitable for single-session use or testing. Counts writes so callers
    can observe write-through behaviour.
    """

    def __init__(
        self,
        history: list[TimestampedThought] | None = None,
        color: str | None = None
    ):
        super().__init__()
        self._history: list[TimestampedThought] = list(history or [])
        self._color = color
        self.write_count = 0

    async def connect(self) -> None:
        """Initialize memory (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close memory (no-op for in-memory)."""
        pass

    async def load_history(self) -> list[TimestampedThought]:
        return list(self._history)

    async def write_history(self, history: list[TimestampedThought]) -> None:
        self._history = list(history)
        self.write_count += 1

    async def purge(self) -> None:
        self._history = []
        self._color = None

    async def load_color(self) -> str | None:
        return self._color

    async def save_color(self, color: str) -> None:
        self._color = color

    @property
    def backend_type(self) -> str:
        return "memory"
