"""
In-memory storage medium.

Behaves like a browser's origin-scoped storage: optional byte quota (keys and
values counted as UTF-8) and an ``available`` switch that makes every call
fail the way a disabled or private-mode store does.
"""

from collections.abc import Iterator

from ..exceptions import StorageQuotaError, StorageUnavailableError
from .base import KeyValueStore


class MemoryStorage(KeyValueStore):
    """Dict-backed storage medium."""

    def __init__(self, quota_bytes: int | None = None, available: bool = True, **config):
        super().__init__(**config)
        self.quota_bytes = quota_bytes
        self.available = available
        self._items: dict[str, str] = {}

    def _check_available(self) -> None:
        if not self.available:
            raise StorageUnavailableError("Storage is disabled")

    def _used_bytes(self, skip_key: str | None = None) -> int:
        return sum(
            len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in self._items.items() if k != skip_key
        )

    def get_item(self, key: str) -> str | None:
        self._check_available()
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_available()
        if self.quota_bytes is not None:
            needed = self._used_bytes(skip_key=key) + len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if needed > self.quota_bytes:
                raise StorageQuotaError(
                    f"Setting '{key}' needs {needed} bytes, quota is {self.quota_bytes}"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._check_available()
        self._items.pop(key, None)

    def keys(self) -> Iterator[str]:
        self._check_available()
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
