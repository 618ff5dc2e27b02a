"""Key-value stores for small pieces of on-device state.

Backs the credential store (auth token, user id), the theme preference and
the advisor chat history. Values must be JSON-serializable.

Note: Both implementations assume a single process and a single event loop.
Writes replace the whole file, which is fine for the handful of keys stored.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger()


class KeyValueStore(ABC):
    """Abstract key-value store."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` when absent."""
        ...

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        ...

    @abstractmethod
    def remove(self, *keys: str) -> None:
        """Remove the given keys. Missing keys are ignored."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store, used in tests and for ephemeral sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class JsonFileKeyValueStore(KeyValueStore):
    """Store persisted as a single JSON object on disk.

    The file is read on every ``get`` so separate store instances pointing
    at the same path observe each other's writes.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: JSON file location. Parent directories are created on the
                first write.
        """
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("kv_store_corrupt", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def put(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, *keys: str) -> None:
        data = self._load()
        for key in keys:
            data.pop(key, None)
        self._save(data)

    def clear(self) -> None:
        self._save({})
