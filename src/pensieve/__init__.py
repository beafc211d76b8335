"""
Pensieve: a personal notebook of timestamped thoughts.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import PensieveConfig, load_config
from .modes import Mode, ModeController, ModeKind
from .notebook import Notebook
from .storage import HistoryStore, create_history_store
from .thoughts import (
    Draft,
    NewDraftPolicy,
    ThoughtLifecycle,
    TimestampedThought,
    filter_history,
)

__all__ = [
    "Draft",
    "HistoryStore",
    "Mode",
    "ModeController",
    "ModeKind",
    "NewDraftPolicy",
    "Notebook",
    "PensieveConfig",
    "ThoughtLifecycle",
    "TimestampedThought",
    "create_history_store",
    "filter_history",
    "load_config",
]
