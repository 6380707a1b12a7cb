"""
Key-value storage backends for persisted client data.

The repository stores one serialized document under one well-known key,
the same way a browser app would use localStorage. Two backends:
- FileKeyValueStore keeps each key in its own JSON file on disk
- MockKeyValueStore keeps strings in a dict for tests and local dev

Writes to the file store go through a temp file and an atomic rename, so
a reader never sees half a document.
"""

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when storage operations fail."""
    pass


@dataclass
class StorageConfig:
    """Configuration for the on-disk store."""
    data_dir: str
    encoding: str = "utf-8"


class KeyValueStore(Protocol):
    """
    Protocol for string key-value storage.

    get_item returns None for a key that has never been written; that is
    an empty state, not an error.
    """

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileKeyValueStore:
    """
    Store each key as <data_dir>/<key>.json.

    The directory is created on first write, so pointing the store at a
    fresh location just reads as empty until something is saved.
    """

    def __init__(self, config: StorageConfig) -> None:
        self._config = config
        self._root = Path(config.data_dir)

        logger.info(
            "Initialized file storage",
            extra={"data_dir": str(self._root)}
        )

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding=self._config.encoding)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(
                "Failed to read storage file",
                extra={"path": str(path), "error": str(e)}
            )
            raise StorageError(f"Read failed: {e}")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_name = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._root, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding=self._config.encoding) as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None

            logger.debug(
                "Wrote storage file",
                extra={"path": str(path), "size_bytes": len(value)}
            )
        except OSError as e:
            logger.error(
                "Failed to write storage file",
                extra={"path": str(path), "error": str(e)}
            )
            raise StorageError(f"Write failed: {e}")
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(
                "Failed to remove storage file",
                extra={"path": str(path), "error": str(e)}
            )
            raise StorageError(f"Remove failed: {e}")

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockKeyValueStore:
    """
    In-memory storage for tests and local development.

    Data lives as long as the instance, so the app keeps one per process.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})
        logger.info("Initialized mock storage (in-memory)")

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_storage_client(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> KeyValueStore:
    """
    Create a store based on configuration.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return an in-memory store

    Returns:
        KeyValueStore implementation (file or mock)
    """
    if mock_mode:
        return MockKeyValueStore()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return FileKeyValueStore(config)
