"""Snapshot codec: the stored entry array and the export envelope.

The stored snapshot is a compact JSON array of entry objects. Exports wrap
the same array as ``{"exportedAt": ..., "entries": [...]}``, pretty-printed.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any

from loguru import logger

from ..core.exceptions import MalformedSnapshotError
from .models import Entry
from .utils import current_timestamp, timestamp_sort_key

EXPORT_FILENAME_PREFIX = "daily-journal-export-"


def decode(text: str | bytes | None) -> Any | None:
    """Parse JSON text, returning None for empty or malformed input."""
    if text is None:
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, ValueError):
        return None


def partition_items(items: Iterable[Any]) -> tuple[list[Entry], list[Any]]:
    """Split decoded JSON items into entries and the raw items that are not valid entries."""
    entries: list[Entry] = []
    unreadable: list[Any] = []
    for item in items:
        try:
            entries.append(Entry.from_dict(item))
        except ValueError:
            unreadable.append(item)
    return entries, unreadable


def entries_from_items(items: Iterable[Any], source: str = "import") -> list[Entry]:
    """Convert decoded JSON items to entries, skipping (and logging) invalid ones."""
    entries: list[Entry] = []
    for index, item in enumerate(items):
        try:
            entries.append(Entry.from_dict(item))
        except ValueError as e:
            logger.warning(f"Skipping {source} item {index}: {e}")
    return entries


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Newest first by ``createdAt``; ties keep their incoming order."""
    return sorted(entries, key=lambda e: timestamp_sort_key(e.created_at), reverse=True)


def encode_snapshot(entries: Iterable[Entry], unreadable: Iterable[Any] = ()) -> str:
    """Serialize entries as the stored snapshot (compact JSON array).

    ``unreadable`` raw items are appended unchanged.
    """
    items = [e.to_dict() for e in entries]
    items.extend(unreadable)
    return json.dumps(items, ensure_ascii=False, separators=(",", ":"))


def decode_snapshot_strict(text: str | bytes) -> tuple[list[Entry], list[Any]]:
    """Decode a stored snapshot into entries and raw items that are not valid entries.

    Raises:
        MalformedSnapshotError: If ``text`` is not JSON or not an array.
    """
    parsed = decode(text)
    if parsed is None:
        raise MalformedSnapshotError("Stored snapshot is not valid JSON")
    if not isinstance(parsed, list):
        raise MalformedSnapshotError(f"Stored snapshot must be an array, got {type(parsed).__name__}")
    return partition_items(parsed)


def build_export(entries: Iterable[Entry], exported_at: str | None = None) -> dict[str, Any]:
    return {
        "exportedAt": exported_at or current_timestamp(),
        "entries": [e.to_dict() for e in entries],
    }


def encode_export(entries: Iterable[Entry], exported_at: str | None = None) -> str:
    """Serialize entries inside the export envelope, pretty-printed."""
    return json.dumps(build_export(entries, exported_at), ensure_ascii=False, indent=2)


def export_filename(day: date | datetime | None = None) -> str:
    """File name for an export made on ``day`` (UTC today by default)."""
    if day is None:
        day = datetime.now(UTC).date()
    elif isinstance(day, datetime):
        day = day.date()
    return f"{EXPORT_FILENAME_PREFIX}{day.isoformat()}.json"
