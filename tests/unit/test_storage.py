"""
Unit tests for the key-value storage backends.
"""

import pytest

from fitcrm.infrastructure.storage.client import (
    FileKeyValueStore,
    MockKeyValueStore,
    StorageConfig,
    StorageError,
    create_storage_client,
)


@pytest.fixture
def file_store(tmp_path) -> FileKeyValueStore:
    return FileKeyValueStore(StorageConfig(data_dir=str(tmp_path / "store")))


class TestFileKeyValueStore:
    """Tests for the on-disk store."""

    def test_missing_key_reads_as_none(self, file_store):
        """The directory doesn't even exist yet."""
        assert file_store.get_item("fitcrm_clients") is None

    def test_set_then_get(self, file_store):
        file_store.set_item("fitcrm_clients", '[{"id": "1"}]')

        assert file_store.get_item("fitcrm_clients") == '[{"id": "1"}]'

    def test_writes_one_json_file_per_key(self, tmp_path, file_store):
        file_store.set_item("fitcrm_clients", "[]")

        assert (tmp_path / "store" / "fitcrm_clients.json").read_text(encoding="utf-8") == "[]"

    def test_overwrite_leaves_no_temp_files(self, tmp_path, file_store):
        file_store.set_item("fitcrm_clients", "[1]")
        file_store.set_item("fitcrm_clients", "[2]")

        files = sorted(p.name for p in (tmp_path / "store").iterdir())

        assert files == ["fitcrm_clients.json"]
        assert file_store.get_item("fitcrm_clients") == "[2]"

    def test_unicode_is_preserved(self, file_store):
        file_store.set_item("k", "Zoë Ångström")

        assert file_store.get_item("k") == "Zoë Ångström"

    def test_remove_item(self, file_store):
        file_store.set_item("k", "v")

        file_store.remove_item("k")
        file_store.remove_item("k")

        assert file_store.get_item("k") is None

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "spaces here"])
    def test_rejects_unsafe_keys(self, file_store, key):
        with pytest.raises(StorageError, match="Invalid storage key"):
            file_store.set_item(key, "x")

    def test_unwritable_location_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")
        store = FileKeyValueStore(StorageConfig(data_dir=str(blocker)))

        with pytest.raises(StorageError, match="Write failed"):
            store.set_item("k", "v")


class TestMockKeyValueStore:
    """Tests for the in-memory store."""

    def test_round_trip(self):
        store = MockKeyValueStore()

        store.set_item("k", "v")

        assert store.get_item("k") == "v"
        assert store.get_item("other") is None

    def test_initial_contents(self):
        store = MockKeyValueStore({"k": "v"})

        assert store.get_item("k") == "v"

    def test_remove_missing_key_is_fine(self):
        MockKeyValueStore().remove_item("k")


class TestCreateStorageClient:
    """Tests for the factory."""

    def test_mock_mode_returns_mock(self):
        assert isinstance(create_storage_client(mock_mode=True), MockKeyValueStore)

    def test_config_returns_file_store(self, tmp_path):
        store = create_storage_client(StorageConfig(data_dir=str(tmp_path)))

        assert isinstance(store, FileKeyValueStore)

    def test_missing_config_is_an_error(self):
        with pytest.raises(ValueError, match="config is required"):
            create_storage_client()
