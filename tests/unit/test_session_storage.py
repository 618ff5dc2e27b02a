"""Tests for key-value stores, the credential store and theme preference."""

from pathlib import Path

import pytest

from pathfinder.session.credential_store import (
    AUTH_TOKEN_KEY,
    USER_ID_KEY,
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
    UserIdentity,
)
from pathfinder.session.preferences import ThemePreference
from pathfinder.storage.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore


class TestJsonFileKeyValueStore:
    """JSON-file persistence."""

    def test_missing_file_reads_as_empty(self, tmp_path: Path):
        """A missing file should read as an empty store."""
        store = JsonFileKeyValueStore(tmp_path / "prefs.json")
        assert store.get("anything") is None
        assert store.get("anything", "fallback") == "fallback"

    def test_values_survive_a_new_instance(self, tmp_path: Path):
        """Values should be read back by a new store instance."""
        path = tmp_path / "nested" / "prefs.json"
        JsonFileKeyValueStore(path).put("k", [1, 2])
        assert JsonFileKeyValueStore(path).get("k") == [1, 2]

    def test_remove_and_clear(self, tmp_path: Path):
        """remove() should drop listed keys and clear() all of them."""
        store = JsonFileKeyValueStore(tmp_path / "prefs.json")
        store.put("a", 1)
        store.put("b", 2)

        store.remove("a", "missing")
        assert store.get("a") is None
        assert store.get("b") == 2

        store.clear()
        assert store.get("b") is None

    def test_corrupt_file_reads_as_empty(self, tmp_path: Path):
        """A corrupt file should read as an empty store."""
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileKeyValueStore(path).get("k") is None


class TestCredentialStore:
    """Identity exists only when both token and user id are stored."""

    def test_empty_store_has_no_identity(self):
        """An empty store should have no identity."""
        assert InMemoryCredentialStore().get_identity() is None

    def test_save_then_get(self):
        """A saved identity should be returned as is."""
        store = InMemoryCredentialStore()
        store.save_identity(UserIdentity(id="u1", token="t1"))
        assert store.get_identity() == UserIdentity(id="u1", token="t1")
        assert store.get_user_id() == "u1"

    @pytest.mark.parametrize(
        "stored",
        [{USER_ID_KEY: "u1"}, {AUTH_TOKEN_KEY: "t1"}, {USER_ID_KEY: "", AUTH_TOKEN_KEY: "t1"}],
    )
    def test_partial_credentials_are_no_identity(self, stored: dict):
        """Token or user id alone should not be an identity."""
        store = CredentialStore(InMemoryKeyValueStore(stored))
        assert store.get_identity() is None

    def test_clear_forgets_identity(self):
        """clear() should remove the identity."""
        store = InMemoryCredentialStore(UserIdentity(id="u1", token="t1"))
        store.clear()
        assert store.get_identity() is None
        assert store.get_user_id() is None

    def test_file_store_persists_across_instances(self, tmp_path: Path):
        """A saved identity should survive a new file store."""
        path = tmp_path / "auth_prefs.json"
        FileCredentialStore(path).save_identity(UserIdentity(id="u1", token="t1"))

        restored = FileCredentialStore(path).get_identity()

        assert restored == UserIdentity(id="u1", token="t1")


class TestThemePreference:
    """Dark-mode preference."""

    def test_defaults_to_light_mode(self):
        """Dark mode should be off by default."""
        assert ThemePreference(InMemoryKeyValueStore()).is_dark_mode() is False

    def test_dark_mode_persists(self, tmp_path: Path):
        """The dark-mode flag should survive a new store instance."""
        path = tmp_path / "settings.json"
        ThemePreference(JsonFileKeyValueStore(path)).set_dark_mode(True)
        assert ThemePreference(JsonFileKeyValueStore(path)).is_dark_mode() is True
