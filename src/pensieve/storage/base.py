"""Abstract base class for thought history stores.

This module defines the persistence interface the notebook consumes.
The abstraction hides:
- Storage format (JSON file, SQLite, remote documents)
- Persistence mechanism and connection management
- Whether commits are written through in full or appended
"""

from abc import ABC, abstractmethod
from typing import Any

from ..thoughts import TimestampedThought


class HistoryStore(ABC):
    """Abstract history store.

    Histories cross this boundary newest first, whatever order the backend
    keeps internally.
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, "Storage", message)

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store gracefully."""

    @abstractmethod
    async def load_history(self) -> list[TimestampedThought]:
        """Load the persisted history, newest first.

        Absent or malformed data yields an empty list.
        """

    @abstractmethod
    async def write_history(self, history: list[TimestampedThought]) -> None:
        """Durably replace the persisted history with ``history``."""

    async def record_commit(
        self,
        thought: TimestampedThought,
        history: list[TimestampedThought]
    ) -> None:
        """Persist a newly committed thought.

        Defaults to a full write-through of ``history``. Backends that can
        append a single thought override this.
        """
        await self.write_history(history)

    @abstractmethod
    async def purge(self) -> None:
        """Delete all persisted thoughts and the colour choice."""

    @abstractmethod
    async def load_color(self) -> str | None:
        """Load the saved colour choice, if any."""

    @abstractmethod
    async def save_color(self, color: str) -> None:
        """Persist the colour choice."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    @property
    def accepts_writes(self) -> bool:
        """Whether writes are currently persisted rather than dropped."""
        return True
