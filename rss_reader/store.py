"""
Persistent store for feed subscriptions and the read-later queue.

The store owns the only live PersistentState of the process. All access
goes through a single lock; mutations are followed by a full rewrite of
the JSON state file. Write failures are logged and never propagated, so a
mutation stays in effect in memory even when the durable copy failed.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
import threading
from typing import Callable, TypeVar

from .core.types import PersistentState


logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeedStore:
    """Lock-guarded owner of the application state and its on-disk mirror.

    Attributes:
        path: Location of the JSON state file
    """

    def __init__(self, path: Path, state: PersistentState | None = None):
        self.path = Path(path)
        self._state = state if state is not None else PersistentState()
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: Path) -> "FeedStore":
        """Create a store whose state is loaded from ``path``."""
        store = cls(path)
        store._state = store.load()
        return store

    def load(self) -> PersistentState:
        """Read the state file.

        A missing file yields an empty state. An unreadable or malformed file
        is logged as an error and also yields an empty state.

        Returns:
            The decoded state, or an empty default
        """
        if not self.path.exists():
            logger.info("No state file found at %s, starting with empty state", self.path)
            return PersistentState()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            state = PersistentState.from_dict(raw)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            # json.JSONDecodeError is a ValueError
            logger.error("Failed to parse state file %s: %s", self.path, exc)
            return PersistentState()

        logger.info(
            "Loaded state from %s (%d feeds, %d read later items)",
            self.path,
            len(state.feeds),
            len(state.read_later),
        )
        return state

    def with_state(self, mutator: Callable[[PersistentState], T]) -> T:
        """Run a read-modify-write under the lock and persist the result.

        The mutator must validate before it mutates: if it raises, nothing is
        written and the exception propagates to the caller.

        Args:
            mutator: Function receiving the live state; its return value is passed through

        Returns:
            Whatever ``mutator`` returned
        """
        with self._lock:
            result = mutator(self._state)
            self._save_locked()
            return result

    def read_state(self, reader: Callable[[PersistentState], T]) -> T:
        """Run a read-only function against the live state under the lock."""
        with self._lock:
            return reader(self._state)

    def snapshot(self) -> PersistentState:
        """Return a deep copy of the current state."""
        with self._lock:
            return self._state.copy()

    def _save_locked(self) -> None:
        try:
            payload = json.dumps(self._state.to_dict(), ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to serialize state: %s", exc)
            return

        try:
            _atomic_write(self.path, payload + "\n")
        except OSError as exc:
            logger.error("Failed to save state to %s: %s", self.path, exc)
            return
        logger.debug("Saved state to %s", self.path)


def _atomic_write(path: Path, text: str) -> None:
    """Write text to a sibling temp file and move it over ``path``."""
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
