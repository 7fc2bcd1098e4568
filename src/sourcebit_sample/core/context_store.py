# src/sourcebit_sample/core/context_store.py
"""
Context store for plugin-owned state that survives across runs.

Each plugin gets one JSON-compatible dict, keyed by plugin name. Backends
hand out deep copies and guard access with a lock, so a reader never sees
a half-applied write from the periodic task thread.
"""

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ContextStore(Protocol):
    """Protocol for plugin context storage backends."""

    def get(self, plugin_name: str) -> dict[str, Any] | None:
        """Get a plugin's context.

        Args:
            plugin_name: Name of the owning plugin

        Returns:
            Copy of the stored context, or None if nothing stored yet
        """
        ...

    def set(self, plugin_name: str, context: dict[str, Any]) -> None:
        """Replace a plugin's context.

        Args:
            plugin_name: Name of the owning plugin
            context: JSON-compatible dict
        """
        ...


class InMemoryContextStore:
    """Process-local context store. Nothing is persisted."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._contexts: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})
        self._lock = threading.Lock()
        self.write_count = 0

    def get(self, plugin_name: str) -> dict[str, Any] | None:
        with self._lock:
            context = self._contexts.get(plugin_name)
            return copy.deepcopy(context) if context is not None else None

    def set(self, plugin_name: str, context: dict[str, Any]) -> None:
        with self._lock:
            self._contexts[plugin_name] = copy.deepcopy(context)
            self.write_count += 1


class FilesystemContextStore:
    """JSON file backed context store.

    All plugin contexts live in a single file:

        {"sourcebit-sample-plugin": {"entries": [...]}, ...}

    The file is rewritten on every set() via a temp file + rename, so a
    crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Path) -> None:
        """Initialize and load any existing cache file.

        Args:
            path: Cache file location (created on first write)

        Raises:
            ValueError: If the file exists but is not a JSON object
        """
        self.path = path
        self._lock = threading.Lock()
        self._contexts = self._load()

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt context cache {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(
                f"Corrupt context cache {self.path}: expected object, "
                f"got {type(data).__name__}"
            )
        logger.debug("Loaded context cache %s (%d plugins)", self.path, len(data))
        return data

    def get(self, plugin_name: str) -> dict[str, Any] | None:
        with self._lock:
            context = self._contexts.get(plugin_name)
            return copy.deepcopy(context) if context is not None else None

    def set(self, plugin_name: str, context: dict[str, Any]) -> None:
        with self._lock:
            self._contexts[plugin_name] = copy.deepcopy(context)
            self._flush()

    def _flush(self) -> None:
        """Write all contexts to disk. Caller holds the lock."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(self._contexts, indent=2, sort_keys=True), encoding="utf-8"
        )
        tmp_path.replace(self.path)
