"""Storage abstraction layer for pensieve.

Provides persistent thought history behind one async interface.
"""

from .base import HistoryStore
from .document import (
    DELETE_FIELD,
    ArrayUnion,
    DocumentHistoryStore,
    DocumentNotFoundError,
    DocumentStore,
    InMemoryDocumentStore,
    JsonDocumentStore,
)
from .factory import SUPPORTED_BACKENDS, create_history_store
from .in_memory import InMemoryHistoryStore
from .json_file import JsonFileHistoryStore

__all__ = [
    "ArrayUnion",
    "DELETE_FIELD",
    "DocumentHistoryStore",
    "DocumentNotFoundError",
    "DocumentStore",
    "HistoryStore",
    "InMemoryDocumentStore",
    "InMemoryHistoryStore",
    "JsonDocumentStore",
    "JsonFileHistoryStore",
    "SUPPORTED_BACKENDS",
    "create_history_store",
]
