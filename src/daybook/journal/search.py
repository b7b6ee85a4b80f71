"""List-view filtering over journal entries."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Entry


def matches(entry: Entry, query: str = "", mood: str = "") -> bool:
    """Whether ``entry`` passes the mood filter and contains ``query``.

    The mood filter is an exact match. The query is a case-insensitive
    substring test over title, content and tags.
    """
    if mood and entry.mood != mood:
        return False
    needle = query.strip().lower()
    if not needle:
        return True
    if needle in entry.title.lower() or needle in entry.content.lower():
        return True
    return any(needle in tag.lower() for tag in entry.tags)


def filter_entries(entries: Iterable[Entry], query: str = "", mood: str = "") -> list[Entry]:
    """Entries matching ``query`` and ``mood``, in their original order."""
    return [e for e in entries if matches(e, query=query, mood=mood)]
