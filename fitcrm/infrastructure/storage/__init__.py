"""
Local persistence for client records.

A JSON file per storage key on disk, or an in-memory map in mock mode,
with the client repository on top.
"""

from .client import (
    FileKeyValueStore,
    KeyValueStore,
    MockKeyValueStore,
    StorageConfig,
    StorageError,
    create_storage_client,
)
from .repository import CLIENTS_STORAGE_KEY, ClientRepository, CorruptStoreError

__all__ = [
    "CLIENTS_STORAGE_KEY",
    "ClientRepository",
    "CorruptStoreError",
    "FileKeyValueStore",
    "KeyValueStore",
    "MockKeyValueStore",
    "StorageConfig",
    "StorageError",
    "create_storage_client",
]
