"""Thought lifecycle module for pensieve.

Owns drafts, commits and the newest-first history of thoughts.
"""

from .lifecycle import (
    AUTOSAVE_PROBE_MS,
    STALE_THRESHOLD_MS,
    NewDraftPolicy,
    ThoughtLifecycle,
)
from .models import (
    Draft,
    ThoughtRecord,
    TimestampedThought,
    dump_history,
    now_millis,
    parse_history,
)
from .search import filter_history, matches

__all__ = [
    "AUTOSAVE_PROBE_MS",
    "Draft",
    "NewDraftPolicy",
    "STALE_THRESHOLD_MS",
    "ThoughtLifecycle",
    "ThoughtRecord",
    "TimestampedThought",
    "dump_history",
    "filter_history",
    "matches",
    "now_millis",
    "parse_history",
]
