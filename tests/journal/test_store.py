"""Tests for the entry store."""

import json

import pytest

from daybook.core.exceptions import StorageUnavailableError
from daybook.core.storage import LocalStorage, MemoryStorage
from daybook.journal.models import Entry
from daybook.journal.store import EntryStore

KEY = "daily-journal-v1"


def _entry(entry_id, created_at, **fields):
    return Entry(id=entry_id, created_at=created_at, **fields)


class FlakyStorage(MemoryStorage):
    """MemoryStorage whose reads or writes can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False

    def get_item(self, key):
        if self.fail_reads:
            raise StorageUnavailableError("reads disabled")
        return super().get_item(key)

    def set_item(self, key, value):
        if self.fail_writes:
            raise StorageUnavailableError("writes disabled")
        super().set_item(key, value)


class TestLoadAll:
    def test_empty_when_absent(self, store):
        assert store.load_all() == []

    def test_corrupt_payload_reads_empty(self, store, storage, log_messages):
        storage.set_item(KEY, "not json")
        assert store.load_all() == []
        assert any("not valid JSON" in m for m in log_messages)

    def test_non_array_reads_empty(self, store, storage):
        storage.set_item(KEY, '{"entries": []}')
        assert store.load_all() == []

    def test_storage_failure_reads_empty(self, log_messages):
        storage = MemoryStorage(available=False)
        assert EntryStore(storage).load_all() == []
        assert any("EntryStore.load_all failed" in m for m in log_messages)

    def test_sorted_newest_first_regardless_of_stored_order(self, store, storage):
        raw = [
            {"id": "a", "createdAt": "2024-01-01T00:00:00Z"},
            {"id": "c", "createdAt": "2024-03-01T00:00:00Z"},
            {"id": "b", "createdAt": "2024-02-01T00:00:00Z"},
        ]
        storage.set_item(KEY, json.dumps(raw))
        loaded = store.load_all()
        assert [e.id for e in loaded] == ["c", "b", "a"]
        stamps = [e.created_at for e in loaded]
        assert stamps == sorted(stamps, reverse=True)

    def test_custom_key(self, storage):
        EntryStore(storage, key="other").add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        assert storage.get_item("other") is not None
        assert storage.get_item(KEY) is None


class TestSaveAll:
    def test_overwrites_snapshot(self, store):
        assert store.save_all([_entry("a", "2024-01-01T00:00:00Z")])
        assert store.save_all([_entry("b", "2024-01-01T00:00:00Z")])
        assert [e.id for e in store.load_all()] == ["b"]

    def test_accepts_dicts(self, store):
        assert store.save_all([{"id": "a", "title": "t", "createdAt": "2024-01-01T00:00:00Z"}])
        assert store.load_all()[0].title == "t"

    def test_quota_failure_keeps_prior_snapshot(self, log_messages):
        storage = MemoryStorage(quota_bytes=200)
        store = EntryStore(storage)
        assert store.save_all([_entry("a", "2024-01-01T00:00:00Z")])
        assert not store.save_all([_entry("b", "2024-01-01T00:00:00Z", content="x" * 500)])
        assert [e.id for e in store.load_all()] == ["a"]
        assert any("EntryStore.save_all failed" in m for m in log_messages)

    def test_rejects_duplicate_ids(self, store):
        assert not store.save_all([_entry("a", "2024-01-01T00:00:00Z"), _entry("a", "2024-01-02T00:00:00Z")])
        assert store.load_all() == []

    def test_rejects_invalid_items(self, store):
        assert not store.save_all([{"title": "no id"}])


class TestAddEntry:
    def test_day_one_then_day_two(self, store):
        day1 = Entry.create(title="Day 1", content="hello")
        assert store.add_entry(day1)
        loaded = store.load_all()
        assert len(loaded) == 1
        assert loaded[0].id == day1.id
        assert loaded[0].created_at

        day2 = Entry(id="day2", title="Day 2", created_at="2999-01-01T00:00:00.000Z")
        assert store.add_entry(day2)
        assert [e.title for e in store.load_all()] == ["Day 2", "Day 1"]

    def test_prepends_so_ties_put_new_first(self, store):
        ts = "2024-01-01T00:00:00.000Z"
        store.add_entry(_entry("first", ts))
        store.add_entry(_entry("second", ts))
        assert [e.id for e in store.load_all()] == ["second", "first"]

    def test_duplicate_id_rejected(self, store):
        assert store.add_entry(_entry("a", "2024-01-01T00:00:00Z", title="one"))
        assert not store.add_entry(_entry("a", "2024-01-02T00:00:00Z", title="two"))
        assert [e.title for e in store.load_all()] == ["one"]

    def test_write_failure_returns_false(self):
        storage = FlakyStorage()
        store = EntryStore(storage)
        storage.fail_writes = True
        assert not store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))

    def test_read_failure_does_not_clobber(self):
        storage = FlakyStorage()
        store = EntryStore(storage)
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        storage.fail_reads = True
        assert not store.add_entry(_entry("b", "2024-01-02T00:00:00Z"))
        storage.fail_reads = False
        assert [e.id for e in store.load_all()] == ["a"]

    def test_corrupt_snapshot_replaced(self, store, storage):
        storage.set_item(KEY, "not json")
        assert store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        assert [e.id for e in store.load_all()] == ["a"]

    def test_add_then_delete_restores_collection(self, store):
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        store.add_entry(_entry("b", "2024-01-02T00:00:00Z"))
        before = {e.id for e in store.load_all()}
        new = Entry.create(title="temp")
        store.add_entry(new)
        store.delete_entry(new.id)
        assert {e.id for e in store.load_all()} == before


class TestUpdateEntry:
    @pytest.fixture
    def seeded(self, store):
        store.add_entry(
            _entry("a", "2024-01-01T00:00:00Z", title="old", content="body", tags=["x"], mood="sad")
        )
        store.add_entry(_entry("b", "2024-01-02T00:00:00Z", title="other"))
        return store

    def test_shallow_merge(self, seeded):
        assert seeded.update_entry("a", {"title": "x"})
        a = seeded.get_entry("a")
        assert a.title == "x"
        assert (a.content, a.tags, a.mood, a.created_at) == ("body", ["x"], "sad", "2024-01-01T00:00:00Z")
        assert seeded.get_entry("b").title == "other"

    def test_cannot_change_identity_or_creation_time(self, seeded):
        assert seeded.update_entry("a", {"id": "zzz", "createdAt": "2030-01-01T00:00:00Z"})
        a = seeded.get_entry("a")
        assert a is not None
        assert a.created_at == "2024-01-01T00:00:00Z"
        assert seeded.get_entry("zzz") is None

    def test_unknown_id_is_noop_success(self, seeded, storage):
        before = storage.get_item(KEY)
        assert seeded.update_entry("missing", {"title": "x"})
        assert storage.get_item(KEY) == before

    def test_write_failure(self):
        storage = FlakyStorage()
        store = EntryStore(storage)
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z", title="old"))
        storage.fail_writes = True
        assert not store.update_entry("a", {"title": "new"})
        storage.fail_writes = False
        assert store.get_entry("a").title == "old"


class TestDeleteEntry:
    def test_removes_only_target(self, store):
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        store.add_entry(_entry("b", "2024-01-02T00:00:00Z"))
        assert store.delete_entry("a")
        assert [e.id for e in store.load_all()] == ["b"]

    def test_missing_id_is_noop_success(self, store):
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        assert store.delete_entry("missing")
        assert [e.id for e in store.load_all()] == ["a"]

    def test_unavailable_storage(self):
        assert not EntryStore(MemoryStorage(available=False)).delete_entry("a")


class TestExportJson:
    def test_envelope_holds_sorted_entries(self, store):
        store.add_entry(_entry("a", "2024-01-01T00:00:00Z"))
        store.add_entry(_entry("b", "2024-01-02T00:00:00Z"))
        parsed = json.loads(store.export_json(exported_at="2024-05-05T00:00:00.000Z"))
        assert parsed["exportedAt"] == "2024-05-05T00:00:00.000Z"
        assert [e["id"] for e in parsed["entries"]] == ["b", "a"]


class TestLocalBackend:
    def test_persists_across_instances(self, tmp_path):
        base = str(tmp_path / "storage")
        EntryStore(LocalStorage(base_path=base)).add_entry(Entry.create(title="kept"))
        loaded = EntryStore(LocalStorage(base_path=base)).load_all()
        assert [e.title for e in loaded] == ["kept"]


class TestDamagedSnapshot:
    def test_repeated_ids_keep_first_and_writes_still_work(self, store, storage, log_messages):
        storage.set_item(
            KEY,
            json.dumps(
                [
                    {"id": "a", "title": "first", "createdAt": "2024-01-01T00:00:00Z"},
                    {"id": "a", "title": "second", "createdAt": "2024-01-01T00:00:00Z"},
                    {"id": "b", "createdAt": "2024-01-02T00:00:00Z"},
                ]
            ),
        )
        assert [e.id for e in store.load_all()] == ["b", "a"]
        assert store.get_entry("a").title == "first"
        assert any("repeated id 'a'" in m for m in log_messages)

        assert store.add_entry(_entry("c", "2024-01-03T00:00:00Z"))
        assert store.update_entry("missing", {"title": "x"})
        assert store.delete_entry("b")
        assert [e.id for e in store.load_all()] == ["c", "a"]
        assert [item["id"] for item in json.loads(storage.get_item(KEY))].count("a") == 1

    def test_legacy_item_without_id_survives_writes(self, store, storage):
        legacy = {"title": "legacy", "createdAt": "2023-01-01T00:00:00Z"}
        storage.set_item(KEY, json.dumps([legacy, 42]))
        assert store.load_all() == []

        assert store.add_entry(Entry.create(title="new"))
        assert store.delete_entry("unrelated")
        stored = json.loads(storage.get_item(KEY))
        assert legacy in stored
        assert 42 in stored
        assert [e.title for e in store.load_all()] == ["new"]

    def test_save_all_replaces_unreadable_items(self, store, storage):
        storage.set_item(KEY, json.dumps([{"title": "legacy"}]))
        assert store.save_all([_entry("a", "2024-01-01T00:00:00Z")])
        assert [item.get("title") for item in json.loads(storage.get_item(KEY))] == [""]
