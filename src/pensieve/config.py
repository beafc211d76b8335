"""Environment-driven configuration.

Centralizes backend selection, file locations and lifecycle timing so the
CLI and the TUI build notebooks the same way.

Environment variables:
    PENSIEVE_BACKEND: memory, json, sqlite or document (default: json)
    PENSIEVE_PATH: Storage file (default: ~/.pensieve/thoughts.json or .db)
    PENSIEVE_USER_ID: Signed-in user for the document backend
    PENSIEVE_STALE_MS: Idle time before autosave (default: 300000)
    PENSIEVE_PROBE_MS: Autosave probe interval (default: 15000)
    PENSIEVE_NEW_DRAFT_POLICY: keep or discard (default: keep)
    PENSIEVE_SEED_WELCOME: Seed a welcome thought into an empty history (default: true)
    PENSIEVE_NARROW_WIDTH: Columns below which the layout is narrow (default: 80)
    PENSIEVE_LOG_LEVEL: Show the log panel at this level (default: hidden)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .modes import NARROW_BREAKPOINT
from .storage import SUPPORTED_BACKENDS, HistoryStore, create_history_store
from .thoughts import AUTOSAVE_PROBE_MS, STALE_THRESHOLD_MS, NewDraftPolicy

DEFAULT_HOME = Path("~/.pensieve")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class PensieveConfig(BaseModel):
    """Resolved application configuration."""

    backend: str = Field(default="json", description="History backend type")
    path: Path | None = Field(default=None, description="Storage file location")
    user_id: str | None = Field(default=None, description="Document backend user")
    stale_threshold_ms: int = Field(default=STALE_THRESHOLD_MS, gt=0)
    autosave_probe_ms: int = Field(default=AUTOSAVE_PROBE_MS, gt=0)
    new_draft_policy: NewDraftPolicy = NewDraftPolicy.KEEP
    seed_welcome: bool = True
    narrow_width: int = Field(default=NARROW_BREAKPOINT, gt=0)
    log_level: str | None = None

    def storage_path(self) -> Path | None:
        """Resolve the storage file for file-backed backends."""
        if self.path is not None:
            return self.path.expanduser()
        if self.backend == "json":
            return (DEFAULT_HOME / "thoughts.json").expanduser()
        if self.backend == "sqlite":
            return (DEFAULT_HOME / "thoughts.db").expanduser()
        if self.backend == "document":
            return (DEFAULT_HOME / "documents.json").expanduser()
        return None

    def create_store(self) -> HistoryStore:
        """Build the configured history store."""
        kwargs: dict[str, Any] = {}
        path = self.storage_path()
        if path is not None:
            kwargs["path"] = path
        if self.backend == "document":
            kwargs["user_id"] = self.user_id
        return create_history_store(self.backend, **kwargs)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_config(environ: Mapping[str, str] | None = None) -> PensieveConfig:
    """Build configuration from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``

    Returns:
        Validated configuration

    Raises:
        ValueError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    backend = env.get("PENSIEVE_BACKEND")
    if backend:
        backend = backend.strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"PENSIEVE_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)}, "
                f"got {backend!r}"
            )
        values["backend"] = backend

    if env.get("PENSIEVE_PATH"):
        values["path"] = Path(env["PENSIEVE_PATH"])
    if env.get("PENSIEVE_USER_ID"):
        values["user_id"] = env["PENSIEVE_USER_ID"]
    if env.get("PENSIEVE_STALE_MS"):
        values["stale_threshold_ms"] = _parse_int("PENSIEVE_STALE_MS", env["PENSIEVE_STALE_MS"])
    if env.get("PENSIEVE_PROBE_MS"):
        values["autosave_probe_ms"] = _parse_int("PENSIEVE_PROBE_MS", env["PENSIEVE_PROBE_MS"])
    if env.get("PENSIEVE_NARROW_WIDTH"):
        values["narrow_width"] = _parse_int("PENSIEVE_NARROW_WIDTH", env["PENSIEVE_NARROW_WIDTH"])
    if env.get("PENSIEVE_SEED_WELCOME"):
        values["seed_welcome"] = _parse_bool("PENSIEVE_SEED_WELCOME", env["PENSIEVE_SEED_WELCOME"])
    if env.get("PENSIEVE_LOG_LEVEL"):
        values["log_level"] = env["PENSIEVE_LOG_LEVEL"].strip().lower()

    policy = env.get("PENSIEVE_NEW_DRAFT_POLICY")
    if policy:
        try:
            values["new_draft_policy"] = NewDraftPolicy(policy.strip().lower())
        except ValueError:
            raise ValueError(
                f"PENSIEVE_NEW_DRAFT_POLICY must be keep or discard, got {policy!r}"
            ) from None

    try:
        return PensieveConfig(**values)
    except ValidationError as e:
        raise ValueError(f"Invalid pensieve configuration: {e}") from e
