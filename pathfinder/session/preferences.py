"""UI preference persistence (theme)."""

from pathfinder.storage.kv_store import KeyValueStore

IS_DARK_MODE_KEY = "is_dark_mode"


class ThemePreference:
    """Dark-mode flag stored in a key-value store. Defaults to light mode."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def is_dark_mode(self) -> bool:
        return bool(self._store.get(IS_DARK_MODE_KEY, False))

    def set_dark_mode(self, is_dark: bool) -> None:
        self._store.put(IS_DARK_MODE_KEY, bool(is_dark))
