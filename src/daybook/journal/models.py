"""Journal entry model and mood labels.

Entries are plain dataclasses. On disk and in export files they are JSON
objects with camelCase keys (``createdAt``); unknown keys picked up from an
import are carried in ``extra`` so they survive a save.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .utils import current_timestamp, generate_id, normalize_tags

# Fields that never change after an entry is created
IMMUTABLE_FIELDS = frozenset({"id", "createdAt", "created_at"})

_ATTR_FOR_KEY = {
    "title": "title",
    "content": "content",
    "tags": "tags",
    "mood": "mood",
}


class Mood(StrEnum):
    """Suggested mood labels. The store accepts any string, including empty."""

    VERY_HAPPY = "very-happy"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANGRY = "angry"


MOOD_EMOJI: dict[str, str] = {
    Mood.VERY_HAPPY: "😄",
    Mood.HAPPY: "🙂",
    Mood.NEUTRAL: "😐",
    Mood.SAD: "😔",
    Mood.ANGRY: "😠",
}


def mood_emoji(mood: str | None) -> str:
    """Emoji for a mood label, neutral for unknown or empty moods."""
    return MOOD_EMOJI.get(mood or "", MOOD_EMOJI[Mood.NEUTRAL])


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_tags(value: Any) -> list[str]:
    if isinstance(value, str):
        return normalize_tags(value)
    if isinstance(value, (list, tuple)):
        return [_as_text(t) for t in value if t is not None]
    return []


@dataclass
class Entry:
    """One journal record.

    Attributes:
        id: Opaque unique id, assigned at creation.
        title: Optional title.
        content: Optional free text.
        tags: Lowercase tags, at most 10 when built through ``normalize_tags``.
        mood: Mood label, see ``Mood``. Empty string allowed.
        created_at: ISO-8601 creation time, never changed by updates.
        extra: Unknown JSON keys preserved from imported data.
    """

    id: str
    title: str = ""
    content: str = ""
    tags: list[str] = field(default_factory=list)
    mood: str = ""
    created_at: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        title: str = "",
        content: str = "",
        tags: str | Iterable[str] | None = None,
        mood: str = "",
    ) -> Entry:
        """Build a new entry with a fresh id and the current timestamp."""
        return cls(
            id=generate_id(),
            title=title or "",
            content=content or "",
            tags=normalize_tags(tags),
            mood=mood or "",
            created_at=current_timestamp(),
        )

    @property
    def has_text(self) -> bool:
        """Whether the entry has a title or content. Blank entries should not be saved."""
        return bool(self.title.strip() or self.content.strip())

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "title": self.title,
                "content": self.content,
                "tags": list(self.tags),
                "mood": self.mood,
                "createdAt": self.created_at,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Entry:
        """Build an entry from its JSON form.

        Raises:
            ValueError: If ``data`` is not a mapping or has no string ``id``.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Entry must be an object, got {type(data).__name__}")
        entry_id = data.get("id")
        if not isinstance(entry_id, str) or not entry_id:
            raise ValueError("Entry must have a non-empty string id")
        known = {"id", "title", "content", "tags", "mood", "createdAt"}
        return cls(
            id=entry_id,
            title=_as_text(data.get("title")),
            content=_as_text(data.get("content")),
            tags=_as_tags(data.get("tags")),
            mood=_as_text(data.get("mood")),
            created_at=_as_text(data.get("createdAt")),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def merged_with(self, changes: Mapping[str, Any]) -> Entry:
        """Return a copy with ``changes`` shallow-merged over this entry.

        ``id`` and ``createdAt`` are ignored; unknown keys land in ``extra``.
        """
        updated = Entry.from_dict(self.to_dict())
        for key, value in changes.items():
            if key in IMMUTABLE_FIELDS or key == "extra":
                continue
            attr = _ATTR_FOR_KEY.get(key)
            if attr == "tags":
                updated.tags = _as_tags(value)
            elif attr is not None:
                setattr(updated, attr, _as_text(value))
            else:
                updated.extra[key] = value
        return updated

    def __repr__(self) -> str:
        label = self.title or (self.content[:30] + "..." if len(self.content) > 30 else self.content)
        return f"Entry(id='{self.id}', created_at='{self.created_at}', label='{label}')"
