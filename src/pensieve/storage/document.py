"""Per-user document store backend.

The networked variant keeps one document per authenticated user in a
``users`` collection:

    {"color": "<name>", "thoughts": [<record>, ...]}   # oldest first

Reads reverse the array into the newest-first convention, each commit
appends one record with an array-union update, and a purge deletes both
fields. The remote wire protocol and authentication are not modelled here:
``DocumentStore`` is the seam a real client plugs into, with an in-memory
and a JSON-file implementation provided.
"""

import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..thoughts import TimestampedThought, dump_history, parse_history
from .base import HistoryStore
from .files import write_json_atomic

USERS_COLLECTION = "users"


class DocumentNotFoundError(LookupError):
    """Raised when updating a document that does not exist."""


@dataclass(frozen=True)
class ArrayUnion:
    """Update operation appending values not already present in an array."""

    values: list[Any] = field(default_factory=list)


class _DeleteField:
    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD = _DeleteField()


def apply_update(document: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    """Apply field updates (plain values, ``ArrayUnion``, ``DELETE_FIELD``).

    Returns:
        A new document; the input is not modified
    """
    updated = copy.deepcopy(document)
    for name, value in fields.items():
        if value is DELETE_FIELD:
            updated.pop(name, None)
        elif isinstance(value, ArrayUnion):
            current = updated.get(name)
            array = list(current) if isinstance(current, list) else []
            for item in value.values:
                if item not in array:
                    array.append(copy.deepcopy(item))
            updated[name] = array
        else:
            updated[name] = copy.deepcopy(value)
    return updated


class DocumentStore(ABC):
    """Minimal document database interface (collections of JSON documents)."""

    _debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Storage", message)

    async def connect(self) -> None:
        """Open the store (no-op by default)."""

    async def disconnect(self) -> None:
        """Close the store (no-op by default)."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Fetch a document, or None if it does not exist."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Update fields of an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed document store for tests and offline use."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        document = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        documents = self._collections.get(collection, {})
        if doc_id not in documents:
            raise DocumentNotFoundError(f"{collection}/{doc_id}")
        documents[doc_id] = apply_update(documents[doc_id], fields)


class JsonDocumentStore(DocumentStore):
    """Document store persisted as a single JSON file.

    File layout: ``{"<collection>": {"<doc_id>": {...}}}``.
    """

    def __init__(self, path: str | Path = "./documents.json") -> None:
        self._path = Path(path).expanduser()

    async def connect(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Read all collections; unreadable or malformed files load as empty."""
        if not self._path.exists():
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._debug("warning", f"Unreadable documents file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            self._debug("warning", f"Unexpected documents format in {self._path}")
            return {}
        return {
            name: documents for name, documents in data.items()
            if isinstance(documents, dict)
        }

    def _save(self, data: dict[str, dict[str, dict[str, Any]]]) -> None:
        write_json_atomic(self._path, data)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        document = self._load().get(collection, {}).get(doc_id)
        return document if isinstance(document, dict) else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        all_data = self._load()
        all_data.setdefault(collection, {})[doc_id] = data
        self._save(all_data)

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        all_data = self._load()
        documents = all_data.get(collection, {})
        if doc_id not in documents:
            raise DocumentNotFoundError(f"{collection}/{doc_id}")
        documents[doc_id] = apply_update(documents[doc_id], fields)
        self._save(all_data)


class DocumentHistoryStore(HistoryStore):
    """History store for the signed-in user's document.

    Without a user id the store is signed out: loads return nothing and
    writes are dropped with a warning.
    """

    def __init__(
        self,
        documents: DocumentStore | None = None,
        user_id: str | None = None,
        path: str | Path | None = None,
    ):
        super().__init__()
        if documents is None:
            documents = JsonDocumentStore(path) if path else InMemoryDocumentStore()
        self._documents = documents
        self._user_id = user_id

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback here and on the document store."""
        super().set_debug_callback(callback)
        self._documents.set_debug_callback(callback)

    @property
    def accepts_writes(self) -> bool:
        """Writes are only kept while a user is signed in."""
        return bool(self._user_id)

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    async def set_user(self, user_id: str | None) -> None:
        """Switch the signed-in user (None signs out)."""
        self._user_id = user_id
        if user_id:
            await self._ensure_account()

    async def _ensure_account(self) -> None:
        """Create the user's document on first sign-in."""
        if await self._documents.get(USERS_COLLECTION, self._user_id) is None:
            await self._documents.set(
                USERS_COLLECTION, self._user_id, {"color": "", "thoughts": []}
            )
            self._debug("info", f"Created document for user {self._user_id}")

    def _signed_in(self, action: str) -> bool:
        if self._user_id:
            return True
        self._debug("warning", f"{action} skipped: no signed-in user")
        return False

    async def connect(self) -> None:
        await self._documents.connect()
        if self._user_id:
            await self._ensure_account()

    async def disconnect(self) -> None:
        await self._documents.disconnect()

    async def _document(self) -> dict[str, Any]:
        return await self._documents.get(USERS_COLLECTION, self._user_id) or {}

    async def load_history(self) -> list[TimestampedThought]:
        if not self._user_id:
            return []
        thoughts = (await self._document()).get("thoughts")
        if not isinstance(thoughts, list):
            return []
        return parse_history(list(reversed(thoughts)))

    async def write_history(self, history: list[TimestampedThought]) -> None:
        if not self._signed_in("History write"):
            return
        await self._documents.update(
            USERS_COLLECTION,
            self._user_id,
            {"thoughts": dump_history(list(reversed(history)))}
        )

    async def record_commit(
        self,
        thought: TimestampedThought,
        history: list[TimestampedThought]
    ) -> None:
        """Append only the new thought."""
        if not self._signed_in("Thought write"):
            return
        await self._documents.update(
            USERS_COLLECTION,
            self._user_id,
            {"thoughts": ArrayUnion([thought.to_record().model_dump()])}
        )

    async def purge(self) -> None:
        if not self._signed_in("Purge"):
            return
        await self._documents.update(
            USERS_COLLECTION,
            self._user_id,
            {"color": DELETE_FIELD, "thoughts": DELETE_FIELD}
        )

    async def load_color(self) -> str | None:
        if not self._user_id:
            return None
        color = (await self._document()).get("color")
        return color if isinstance(color, str) and color else None

    async def save_color(self, color: str) -> None:
        if not self._signed_in("Colour write"):
            return
        await self._documents.update(USERS_COLLECTION, self._user_id, {"color": color})

    @property
    def backend_type(self) -> str:
        return "document"
