"""Identifier, timestamp and tag helpers for journal entries."""

from __future__ import annotations

import secrets
import string
import time
from collections.abc import Iterable
from datetime import UTC, datetime

MAX_TAGS = 10
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a new entry id: base-36 milliseconds, a dash, six random base-36 chars.

    Unique with overwhelming probability within one process; not a UUID.
    """
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{_to_base36(millis)}-{suffix}"


def current_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def timestamp_sort_key(value: object) -> datetime:
    """Sort key for ``createdAt`` values; unparseable timestamps sort as the epoch."""
    return parse_timestamp(value) or EPOCH


def normalize_tags(raw: str | Iterable[str] | None) -> list[str]:
    """Split comma-separated tags, trim, drop empties, keep the first 10, lowercase.

    >>> normalize_tags(" A, b ,, C ")
    ['a', 'b', 'c']
    """
    if not raw:
        return []
    if not isinstance(raw, str):
        raw = ",".join(str(t) for t in raw)
    tags = [t.strip() for t in raw.split(",")]
    return [t.lower() for t in tags if t][:MAX_TAGS]
