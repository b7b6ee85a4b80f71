"""Import merger: fold an exported snapshot into the local collection.

Entries are matched by id. Local entries always win; an imported entry is
only added when its id is not already present.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..core.exceptions import MalformedSnapshotError
from .codec import decode, entries_from_items, sort_entries
from .models import Entry


def parse_import(payload: str | bytes | Mapping[str, Any]) -> list[Entry]:
    """Validate an import payload and return its entries.

    Accepts raw JSON text/bytes or an already-decoded mapping. The payload
    must be an object whose ``entries`` field is an array; individual items
    that are not valid entries are skipped.

    Raises:
        MalformedSnapshotError: If the payload is not JSON or lacks an ``entries`` array.
    """
    parsed = payload if isinstance(payload, Mapping) else decode(payload)
    if parsed is None:
        raise MalformedSnapshotError("Import payload is not valid JSON")
    if not isinstance(parsed, Mapping):
        raise MalformedSnapshotError(f"Import payload must be an object, got {type(parsed).__name__}")
    items = parsed.get("entries")
    if not isinstance(items, list):
        raise MalformedSnapshotError("Import payload has no 'entries' array")
    return entries_from_items(items, source="import")


def merge_entries(local: Iterable[Entry], incoming: Iterable[Entry]) -> list[Entry]:
    """Union of ``local`` and ``incoming`` by id, local first, sorted newest first."""
    by_id: dict[str, Entry] = {}
    for entry in local:
        by_id.setdefault(entry.id, entry)
    for entry in incoming:
        if entry.id not in by_id:
            by_id[entry.id] = entry
    return sort_entries(by_id.values())
