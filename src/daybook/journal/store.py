"""Entry store: the single owner of the persisted journal snapshot.

The whole collection lives as one JSON array under a fixed key of a
``KeyValueStore``. Every mutation is a full load-modify-save cycle with no
locking, so overlapping writers lose updates (last save wins).

Public methods never raise. Storage and parse failures are logged through
loguru and reported as an empty list (reads) or ``False`` (writes).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger

from ..core.config import DEFAULT_STORAGE_KEY
from ..core.exceptions import MalformedSnapshotError, StorageError
from ..core.storage import KeyValueStore
from .codec import decode_snapshot_strict, encode_export, encode_snapshot, sort_entries
from .merge import merge_entries, parse_import
from .models import Entry

Change = Callable[[list[Entry]], list[Entry] | None]


def _coerce(entry: Entry | Mapping[str, Any]) -> Entry:
    return entry if isinstance(entry, Entry) else Entry.from_dict(entry)


def _find_duplicate_id(entries: Iterable[Entry]) -> str | None:
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            return entry.id
        seen.add(entry.id)
    return None


def _drop_repeated_ids(entries: list[Entry], key: str) -> list[Entry]:
    """Keep the first entry for each id."""
    seen: set[str] = set()
    kept: list[Entry] = []
    for entry in entries:
        if entry.id in seen:
            logger.warning(f"Dropping repeated id '{entry.id}' from stored snapshot '{key}'")
            continue
        seen.add(entry.id)
        kept.append(entry)
    return kept


class EntryStore:
    """Journal entries persisted as one snapshot in a key-value storage medium."""

    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def _read(self) -> tuple[list[Entry], list[Any]]:
        """Read the stored collection, unsorted, plus raw items that are not valid entries.

        A missing or corrupt snapshot reads as empty. Repeated ids keep their
        first occurrence. Storage failures raise.
        """
        raw = self.storage.get_item(self.key)
        if not raw:
            return [], []
        try:
            entries, unreadable = decode_snapshot_strict(raw)
        except MalformedSnapshotError as e:
            logger.warning(f"Ignoring stored snapshot under '{self.key}': {e}")
            return [], []
        if unreadable:
            logger.warning(
                f"Stored snapshot '{self.key}' holds {len(unreadable)} unreadable items; keeping them as-is"
            )
        return _drop_repeated_ids(entries, self.key), unreadable

    def _write(self, operation: str, entries: list[Entry], unreadable: Iterable[Any] = ()) -> bool:
        try:
            payload = encode_snapshot(entries, unreadable)
            self.storage.set_item(self.key, payload)
        except StorageError as e:
            logger.error(f"EntryStore.{operation} failed: {e}")
            return False
        except Exception as e:
            logger.error(f"EntryStore.{operation} failed unexpectedly: {e!r}")
            return False
        logger.debug(f"Saved {len(entries)} entries under '{self.key}'")
        return True

    def _mutate(self, operation: str, change: Change) -> bool:
        """Run ``change`` inside a load-modify-save cycle.

        Stored items that are not valid entries are written back untouched.
        """
        try:
            entries, unreadable = self._read()
            updated = change(entries)
        except StorageError as e:
            logger.error(f"EntryStore.{operation} failed: {e}")
            return False
        except Exception as e:
            logger.error(f"EntryStore.{operation} failed unexpectedly: {e!r}")
            return False
        if updated is None:
            return False
        duplicate = _find_duplicate_id(updated)
        if duplicate is not None:
            logger.error(f"EntryStore.{operation} rejected entries: duplicate id '{duplicate}'")
            return False
        return self._write(operation, updated, unreadable)

    # -- Reads --------------------------------------------------------------

    def load_all(self) -> list[Entry]:
        """Return every entry, newest first. Never raises; failures read as empty."""
        try:
            entries, _ = self._read()
            return sort_entries(entries)
        except StorageError as e:
            logger.error(f"EntryStore.load_all failed: {e}")
        except Exception as e:
            logger.error(f"EntryStore.load_all failed unexpectedly: {e!r}")
        return []

    def get_entry(self, entry_id: str) -> Entry | None:
        """Return the entry with ``entry_id``, or None."""
        for entry in self.load_all():
            if entry.id == entry_id:
                return entry
        return None

    def export_json(self, exported_at: str | None = None) -> str:
        """The current collection wrapped in the export envelope."""
        return encode_export(self.load_all(), exported_at=exported_at)

    # -- Writes -------------------------------------------------------------

    def save_all(self, entries: Iterable[Entry | Mapping[str, Any]]) -> bool:
        """Overwrite the snapshot with ``entries``.

        Returns False, leaving the prior snapshot in place, when the entries
        are invalid, contain duplicate ids, or the medium rejects the write.
        """
        try:
            items = [_coerce(e) for e in entries]
        except ValueError as e:
            logger.error(f"EntryStore.save_all rejected entries: {e}")
            return False
        duplicate = _find_duplicate_id(items)
        if duplicate is not None:
            logger.error(f"EntryStore.save_all rejected entries: duplicate id '{duplicate}'")
            return False
        return self._write("save_all", items)

    def add_entry(self, entry: Entry | Mapping[str, Any]) -> bool:
        """Prepend ``entry`` and persist. Fails if its id is already stored."""
        try:
            new_entry = _coerce(entry)
        except ValueError as e:
            logger.error(f"EntryStore.add_entry rejected entry: {e}")
            return False

        def change(entries: list[Entry]) -> list[Entry] | None:
            if any(e.id == new_entry.id for e in entries):
                logger.warning(f"EntryStore.add_entry: id '{new_entry.id}' already exists")
                return None
            return [new_entry, *entries]

        return self._mutate("add_entry", change)

    def update_entry(self, entry_id: str, changes: Mapping[str, Any]) -> bool:
        """Shallow-merge ``changes`` over the entry with ``entry_id`` and persist.

        ``id`` and ``createdAt`` cannot be changed. An unknown id is a no-op
        that still re-saves the collection and reports success.
        """

        def change(entries: list[Entry]) -> list[Entry]:
            return [e.merged_with(changes) if e.id == entry_id else e for e in entries]

        return self._mutate("update_entry", change)

    def delete_entry(self, entry_id: str) -> bool:
        """Remove the entry with ``entry_id`` (no-op if absent) and persist."""

        def change(entries: list[Entry]) -> list[Entry]:
            return [e for e in entries if e.id != entry_id]

        return self._mutate("delete_entry", change)

    def merge_import(self, payload: str | bytes | Mapping[str, Any]) -> bool:
        """Merge an exported snapshot into the store, keeping local entries on id clashes.

        A payload that is not an object with an ``entries`` array is rejected
        without touching the store.
        """
        try:
            incoming = parse_import(payload)
        except MalformedSnapshotError as e:
            logger.error(f"Import failed: {e}")
            return False

        def change(entries: list[Entry]) -> list[Entry]:
            merged = merge_entries(entries, incoming)
            logger.info(f"Import merged {len(merged) - len(entries)} new of {len(incoming)} entries")
            return merged

        return self._mutate("merge_import", change)
