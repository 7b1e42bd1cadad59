"""
File catalog tests
- key/value backends
- create / save / load / rename / delete
- corrupt data handling
"""

import json
from datetime import timedelta

import pytest

from records import DERIVED_FIELDS, Group, satisfies_invariant
from storage import (
    DirectoryStore,
    KeyValueStore,
    MemoryStore,
    PersistenceStore,
    StoredFileInfo,
    generate_file_id,
    strip_groups,
)
from storage.schemas import utc_now


CATALOG_KEY = "handball-files-index"
PAYLOAD_PREFIX = "handball-file-"


# =============================================================================
# Backends
# =============================================================================

class TestMemoryStore:
    """In-memory backend"""

    def test_get_set_remove(self, memory_kv):
        assert memory_kv.get("a") is None
        memory_kv.set("a", "1")
        assert memory_kv.get("a") == "1"
        assert "a" in memory_kv
        memory_kv.remove("a")
        memory_kv.remove("a")
        assert memory_kv.get("a") is None

    def test_protocol(self, memory_kv):
        assert isinstance(memory_kv, KeyValueStore)


class TestDirectoryStore:
    """One file per key"""

    def test_round_trip(self, tmp_path):
        kv = DirectoryStore(str(tmp_path / "store"))
        kv.set("handball-file-abc", '[{"name": "Grupa 1"}]')
        assert kv.get("handball-file-abc") == '[{"name": "Grupa 1"}]'
        assert kv.keys() == ["handball-file-abc"]

    def test_unsafe_key_encoded(self, tmp_path):
        kv = DirectoryStore(str(tmp_path))
        kv.set("a/b c", "x")
        assert kv.get("a/b c") == "x"
        assert "a/b c" in kv.keys()

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        kv = DirectoryStore(str(tmp_path))
        kv.set("k", "1")
        kv.set("k", "2")
        assert kv.get("k") == "2"
        assert [p.suffix for p in tmp_path.iterdir()] == [".json"]

    def test_missing_key(self, tmp_path):
        kv = DirectoryStore(str(tmp_path))
        assert kv.get("nope") is None
        kv.remove("nope")

    def test_protocol(self, tmp_path):
        assert isinstance(DirectoryStore(str(tmp_path)), KeyValueStore)


# =============================================================================
# Catalog
# =============================================================================

class TestCatalog:
    """Catalog entries"""

    def test_empty(self, store):
        assert store.list_files() == []
        assert store.recent_files() == []

    def test_create_file(self, store):
        file_id = store.create_file("Kadra 2024")
        files = store.list_files()
        assert len(files) == 1
        assert files[0].id == file_id
        assert files[0].name == "Kadra 2024"
        assert store.load_file(file_id) == []

    def test_ids_unique(self):
        ids = {generate_file_id() for _ in range(200)}
        assert len(ids) == 200

    def test_get_file_info(self, store):
        file_id = store.create_file("A")
        assert store.get_file_info(file_id).name == "A"
        assert store.get_file_info("missing") is None

    def test_recent_files_order(self, memory_kv):
        now = utc_now()
        files = [
            StoredFileInfo(id="old", name="Old", last_modified=now - timedelta(days=2)),
            StoredFileInfo(id="new", name="New", last_modified=now),
            StoredFileInfo(id="mid", name="Mid", last_modified=now - timedelta(days=1)),
        ]
        memory_kv.set(CATALOG_KEY, json.dumps([f.model_dump(mode="json", by_alias=True) for f in files]))
        store = PersistenceStore(memory_kv)
        assert [f.id for f in store.list_files()] == ["old", "new", "mid"]
        assert [f.id for f in store.recent_files()] == ["new", "mid", "old"]

    def test_catalog_wire_format(self, store, memory_kv):
        file_id = store.create_file("A")
        entries = json.loads(memory_kv.get(CATALOG_KEY))
        assert entries[0]["id"] == file_id
        assert entries[0]["name"] == "A"
        assert "lastModified" in entries[0]

    def test_rename_file(self, store):
        file_id = store.create_file("A")
        store.rename_file(file_id, "B")
        assert store.get_file_info(file_id).name == "B"

    def test_rename_unknown_is_noop(self, store):
        store.create_file("A")
        store.rename_file("missing", "B")
        assert [f.name for f in store.list_files()] == ["A"]

    def test_delete_file(self, store, memory_kv):
        keep = store.create_file("Keep")
        drop = store.create_file("Drop")
        store.delete_file(drop)
        assert [f.id for f in store.list_files()] == [keep]
        assert memory_kv.get(PAYLOAD_PREFIX + drop) is None
        assert store.load_file(drop) is None

    def test_delete_twice(self, store):
        file_id = store.create_file("A")
        store.delete_file(file_id)
        store.delete_file(file_id)
        assert store.list_files() == []

    def test_custom_keys(self, memory_kv):
        store = PersistenceStore(memory_kv, catalog_key="idx", payload_prefix="f-")
        file_id = store.create_file("A")
        assert memory_kv.get("idx") is not None
        assert memory_kv.get("f-" + file_id) == "[]"


# =============================================================================
# Payloads
# =============================================================================

class TestSaveLoad:
    """Group payloads"""

    def test_round_trip(self, store, sample_groups):
        file_id = store.create_file("Kadra")
        store.save_file(file_id, "Kadra", sample_groups)
        loaded = store.load_file(file_id)
        assert loaded == sample_groups

    def test_derived_fields_not_stored(self, store, memory_kv, sample_groups):
        file_id = store.create_file("Kadra")
        store.save_file(file_id, "Kadra", sample_groups)
        payload = json.loads(memory_kv.get(PAYLOAD_PREFIX + file_id))
        player = payload[0]["players"][0]
        assert player["firstName"] == "Jan"
        assert player["medicineBall_forward"] == 12.4
        for key in ("sprint30m_score", "medicineBall_sum", "medicineBall_score", "fiveJump_score"):
            assert key not in player

    def test_derived_fields_recomputed(self, store, memory_kv):
        """Stale scores written by an older version are replaced on load"""
        memory_kv.set(PAYLOAD_PREFIX + "legacy", json.dumps([{
            "name": "Grupa 1",
            "players": [{
                "firstName": "Ewa",
                "lastName": "Lis",
                "sprint30m_time": 3.70,
                "sprint30m_score": 3,
                "medicineBall_forward": 10.0,
                "medicineBall_backward": 11.0,
                "medicineBall_sum": 99.0,
            }],
        }]))
        groups = store.load_file("legacy")
        player = groups[0].players[0]
        assert player.sprint30m_score == 80
        assert player.medicine_ball_sum == 21.0
        assert player.medicine_ball_score == 35
        assert satisfies_invariant(player)

    def test_manual_scores_kept(self, store, full_player):
        file_id = store.create_file("A")
        store.save_file(file_id, "A", [Group(name="G", players=[full_player])])
        player = store.load_file(file_id)[0].players[0]
        assert player.hand_throw_score == 55
        assert player.envelope_score == 47

    def test_save_updates_catalog(self, store, sample_groups):
        file_id = store.create_file("A")
        before = store.get_file_info(file_id).last_modified
        store.save_file(file_id, "A (kopia)", sample_groups)
        info = store.get_file_info(file_id)
        assert info.name == "A (kopia)"
        assert info.last_modified >= before
        assert len(store.list_files()) == 1

    def test_save_unknown_id_adds_entry(self, store, sample_groups):
        store.save_file("external", "Import", sample_groups)
        assert store.get_file_info("external").name == "Import"
        assert store.load_file("external") == sample_groups

    def test_strip_groups(self, sample_groups):
        stored = strip_groups(sample_groups)
        dumped = stored[0].players[0].model_dump()
        for name in DERIVED_FIELDS:
            assert name not in dumped


class TestCorruptData:
    """Unreadable data is a soft miss"""

    def test_corrupt_catalog(self, memory_kv):
        memory_kv.set(CATALOG_KEY, "{not json")
        assert PersistenceStore(memory_kv).list_files() == []

    def test_wrong_catalog_shape(self, memory_kv):
        memory_kv.set(CATALOG_KEY, '{"id": "x"}')
        assert PersistenceStore(memory_kv).list_files() == []

    def test_corrupt_payload(self, store, memory_kv):
        file_id = store.create_file("A")
        memory_kv.set(PAYLOAD_PREFIX + file_id, "[{]")
        assert store.load_file(file_id) is None

    def test_non_numeric_measurement(self, memory_kv):
        memory_kv.set(PAYLOAD_PREFIX + "bad", json.dumps([
            {"name": "G", "players": [{"sprint30m_time": "fast"}]},
        ]))
        assert PersistenceStore(memory_kv).load_file("bad") is None

    def test_missing_payload(self, store):
        assert store.load_file("never-created") is None

    def test_undecodable_catalog_file(self, tmp_path):
        store = PersistenceStore(DirectoryStore(str(tmp_path)))
        store.create_file("A")
        (tmp_path / f"{CATALOG_KEY}.json").write_bytes(b"\xff\xfe\x00bad")
        assert store.list_files() == []

    def test_undecodable_payload_file(self, tmp_path):
        store = PersistenceStore(DirectoryStore(str(tmp_path)))
        file_id = store.create_file("A")
        (tmp_path / f"{PAYLOAD_PREFIX}{file_id}.json").write_bytes(b"\xff\xfe\x00bad")
        assert store.load_file(file_id) is None
        assert [f.id for f in store.list_files()] == [file_id]

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_catalog_value(self, memory_kv, raw):
        if raw is not None:
            memory_kv.set(CATALOG_KEY, raw)
        assert PersistenceStore(memory_kv).list_files() == []


class TestDirectoryBackedStore:
    """Catalog over the directory backend"""

    def test_survives_reopen(self, tmp_path, sample_groups):
        root = str(tmp_path / "data")
        first = PersistenceStore(DirectoryStore(root))
        file_id = first.create_file("Kadra")
        first.save_file(file_id, "Kadra", sample_groups)

        second = PersistenceStore(DirectoryStore(root))
        assert [f.id for f in second.list_files()] == [file_id]
        assert second.load_file(file_id) == sample_groups

    def test_memory_and_directory_agree(self, tmp_path, sample_groups):
        stores = [PersistenceStore(MemoryStore()), PersistenceStore(DirectoryStore(str(tmp_path)))]
        results = []
        for s in stores:
            s.save_file("same", "Same", sample_groups)
            results.append(s.load_file("same"))
        assert results[0] == results[1]
