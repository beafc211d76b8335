"""JSON file history store.

Keeps the whole notebook in one small JSON document:

    {"color": "<name>", "thoughts": [{"thought": "...", "time": 1700000000000}, ...]}

Thoughts are stored newest first. A bare list of records (the init payload
format) is also accepted on load. Every write replaces the file atomically.
"""

import json
from pathlib import Path
from typing import Any

from ..thoughts import TimestampedThought, dump_history, parse_history
from .base import HistoryStore
from .files import write_json_atomic


class JsonFileHistoryStore(HistoryStore):
    """History store backed by a JSON file.

    Supports persistent storage across sessions without a database.
    """

    def __init__(self, path: str | Path = "./thoughts.json"):
        super().__init__()
        self._path = Path(path).expanduser()

    async def connect(self) -> None:
        """Ensure the parent directory exists."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

    async def disconnect(self) -> None:
        pass

    def _read(self) -> dict[str, Any]:
        """Read the document, normalizing legacy and malformed content."""
        if not self._path.exists():
            return {"color": None, "thoughts": []}

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._debug("warning", f"Unreadable notebook file {self._path}: {e}")
            return {"color": None, "thoughts": []}

        if isinstance(payload, list):
            return {"color": None, "thoughts": payload}
        if not isinstance(payload, dict):
            self._debug("warning", f"Unexpected notebook format in {self._path}")
            return {"color": None, "thoughts": []}

        color = payload.get("color")
        return {
            "color": color if isinstance(color, str) and color else None,
            "thoughts": payload.get("thoughts", []),
        }

    def _write(self, document: dict[str, Any]) -> None:
        write_json_atomic(self._path, document)

    async def load_history(self) -> list[TimestampedThought]:
        raw = self._read()["thoughts"]
        history = parse_history(raw)
        if isinstance(raw, list) and len(history) != len(raw):
            self._debug("warning", f"Skipped {len(raw) - len(history)} malformed thought(s)")
        return history

    async def write_history(self, history: list[TimestampedThought]) -> None:
        document = self._read()
        document["thoughts"] = dump_history(history)
        self._write(document)

    async def purge(self) -> None:
        self._write({"color": None, "thoughts": []})

    async def load_color(self) -> str | None:
        return self._read()["color"]

    async def save_color(self, color: str) -> None:
        document = self._read()
        document["color"] = color
        self._write(document)

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
