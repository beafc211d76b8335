"""Data models for thoughts and drafts.

These models define what a committed thought and an in-progress draft look
like, independent of how they are edited or where they are stored.
"""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


def now_millis() -> int:
    """Current wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


class ThoughtRecord(BaseModel):
    """Serialized form of a single thought.

    This is the persisted and init-seeding format:
    ``{"thought": <string>, "time": <integer milliseconds since epoch>}``.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    thought: str = Field(description="Thought text")
    time: int = Field(description="Creation time in milliseconds since epoch")


class TimestampedThought(BaseModel):
    """A committed thought with the time its draft was started.

    Immutable once created. The text is always trimmed and non-empty.
    """

    model_config = ConfigDict(frozen=True)

    thought: str = Field(description="Trimmed, non-empty thought text")
    created_at: int = Field(description="Draft start time in milliseconds since epoch")

    @field_validator("thought")
    @classmethod
    def _trimmed_non_empty(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("thought must not be empty")
        return trimmed

    def to_record(self) -> ThoughtRecord:
        """Convert to the serialized record format."""
        return ThoughtRecord(thought=self.thought, time=self.created_at)

    @classmethod
    def from_record(cls, record: ThoughtRecord) -> "TimestampedThought":
        """Build from a serialized record."""
        return cls(thought=record.thought, created_at=record.time)


class Draft(BaseModel):
    """The single in-progress thought being edited.

    Unlike a committed thought, ``text`` may be empty or whitespace-only.
    ``started_at`` becomes the ``created_at`` of the committed thought;
    ``last_edited_at`` drives idle detection.
    """

    text: str = ""
    last_edited_at: int
    started_at: int

    @classmethod
    def fresh(cls, now: int) -> "Draft":
        """Create an empty draft started at ``now``."""
        return cls(text="", last_edited_at=now, started_at=now)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


def parse_history(payload: Any) -> list[TimestampedThought]:
    """Parse a persisted or init payload into a newest-first history.

    Absent or malformed payloads yield an empty history; individual malformed
    entries (wrong types, blank text) are skipped. Never raises.

    Args:
        payload: Ordered list of ``{"thought", "time"}`` mappings, newest first

    Returns:
        History in the payload's order
    """
    if not isinstance(payload, list):
        return []

    history = []
    for entry in payload:
        try:
            record = ThoughtRecord.model_validate(entry)
            history.append(TimestampedThought.from_record(record))
        except ValidationError:
            continue
    return history


def dump_history(history: list[TimestampedThought]) -> list[dict[str, Any]]:
    """Serialize a history into a list of plain record dicts, preserving order."""
    return [thought.to_record().model_dump() for thought in history]
