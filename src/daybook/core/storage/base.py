"""
Abstract base class for storage media.

A storage medium is a synchronous, string-to-string key-value store in the
shape of a browser's ``localStorage``: ``get_item`` returns None for a missing
key, ``set_item`` overwrites, ``remove_item`` is a no-op for a missing key.
Backends raise ``StorageError`` subclasses; callers decide how to degrade.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class KeyValueStore(ABC):
    """Abstract base class for string key-value storage media."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any prior value.

        On failure the prior value must be left untouched.
        """

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""

    def __contains__(self, key: str) -> bool:
        return self.get_item(key) is not None

    def clear(self) -> None:
        """Remove every key."""
        for key in list(self.keys()):
            self.remove_item(key)
