"""Factory for creating history stores."""

from typing import Any

from .base import HistoryStore

SUPPORTED_BACKENDS = ("memory", "json", "sqlite", "document")


def create_history_store(
    backend: str = "json",
    **kwargs: Any
) -> HistoryStore:
    """Create a history store.

    Args:
        backend: Backend type ("memory", "json", "sqlite" or "document")
        **kwargs: Backend-specific configuration

    Returns:
        HistoryStore instance

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> store = create_history_store("sqlite", path="~/.pensieve/thoughts.db")
        >>> await store.connect()
    """
    if backend == "memory":
        from .in_memory import InMemoryHistoryStore
        return InMemoryHistoryStore(**kwargs)

    elif backend == "json":
        from .json_file import JsonFileHistoryStore
        return JsonFileHistoryStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteHistoryStore
        return SQLiteHistoryStore(**kwargs)

    elif backend == "document":
        from .document import DocumentHistoryStore
        return DocumentHistoryStore(**kwargs)

    raise ValueError(
        f"Unsupported history backend: {backend}. "
        f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
    )
