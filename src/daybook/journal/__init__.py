"""Journal entries: model, snapshot codec, persistent store, and import merging.

Typical use::

    storage = LocalStorage(base_path="~/.daybook-data/storage")
    store = EntryStore(storage)
    store.add_entry(Entry.create(title="Day 1", content="hello"))
    store.load_all()  # newest first
"""

from .codec import decode, encode_export, export_filename
from .files import export_to_file, import_file
from .merge import merge_entries, parse_import
from .models import Entry, Mood, mood_emoji
from .search import filter_entries
from .store import EntryStore
from .utils import current_timestamp, generate_id, normalize_tags

__all__ = [
    "Entry",
    "EntryStore",
    "Mood",
    "current_timestamp",
    "decode",
    "encode_export",
    "export_filename",
    "export_to_file",
    "filter_entries",
    "generate_id",
    "import_file",
    "merge_entries",
    "mood_emoji",
    "normalize_tags",
    "parse_import",
]
