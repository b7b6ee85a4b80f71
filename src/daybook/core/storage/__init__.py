"""
Storage media for daybook.

A storage medium is a synchronous string key-value store. The journal keeps
its whole entry collection under a single key of one medium.
"""

from ..exceptions import (
    StorageError,
    StoragePermissionError,
    StorageQuotaError,
    StorageUnavailableError,
)
from .base import KeyValueStore
from .local import LocalStorage
from .memory import MemoryStorage


def create_storage(config) -> KeyValueStore:
    """Build the storage medium named by ``storage.backend`` in a Config."""
    backend = config.get_storage_backend()
    if backend == "memory":
        return MemoryStorage(quota_bytes=config.get_quota_bytes())
    return LocalStorage(base_path=config.get("storage.path"))


__all__ = [
    "KeyValueStore",
    "LocalStorage",
    "MemoryStorage",
    "StorageError",
    "StoragePermissionError",
    "StorageQuotaError",
    "StorageUnavailableError",
    "create_storage",
]
