"""
File catalog over a key/value store

One catalog key lists the saved files; each file's groups live under
``payload_prefix + id``. Derived fields are stripped before writing and
recomputed on load, so a change to the point tables never leaves stale
scores behind.
"""

import secrets
import time
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from records import Group, recompute_derived

from .config import storage_config
from .kv import KeyValueStore
from .schemas import (
    StoredFileInfo,
    StoredGroup,
    StoredPlayer,
    catalog_adapter,
    payload_adapter,
    utc_now,
)


def generate_file_id() -> str:
    """Millisecond timestamp + random suffix"""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(3)}"


def strip_groups(groups: List[Group]) -> List[StoredGroup]:
    """Reduce every player to the stored field subset"""
    return [
        StoredGroup(name=g.name, players=[StoredPlayer.from_player(p) for p in g.players])
        for g in groups
    ]


def restore_groups(stored: List[StoredGroup]) -> List[Group]:
    """Rebuild full players, derived fields included"""
    return [
        Group(name=g.name, players=[recompute_derived(p.to_player()) for p in g.players])
        for g in stored
    ]


class PersistenceStore:
    """Named files, each holding a list of groups"""

    def __init__(
        self,
        kv: KeyValueStore,
        catalog_key: Optional[str] = None,
        payload_prefix: Optional[str] = None,
    ):
        self.kv = kv
        self.catalog_key = catalog_key or storage_config.catalog_key
        self.payload_prefix = payload_prefix or storage_config.payload_prefix

    def _payload_key(self, file_id: str) -> str:
        return self.payload_prefix + file_id

    # ==================== Catalog ====================

    def list_files(self) -> List[StoredFileInfo]:
        """Catalog entries in insertion order; [] when missing or unreadable"""
        raw = self.kv.get(self.catalog_key)
        if not raw:
            return []
        try:
            return catalog_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"File catalog unreadable, treating as empty: {e.error_count()} errors")
            return []

    def recent_files(self) -> List[StoredFileInfo]:
        """Catalog entries, most recently modified first"""
        return sorted(self.list_files(), key=lambda f: f.last_modified, reverse=True)

    def get_file_info(self, file_id: str) -> Optional[StoredFileInfo]:
        for info in self.list_files():
            if info.id == file_id:
                return info
        return None

    def _save_catalog(self, files: List[StoredFileInfo]) -> None:
        self.kv.set(self.catalog_key, catalog_adapter.dump_json(files, by_alias=True).decode("utf-8"))

    # ==================== Files ====================

    def create_file(self, name: str) -> str:
        """Register a new empty file and return its id"""
        file_id = generate_file_id()
        files = self.list_files()
        files.append(StoredFileInfo(id=file_id, name=name, last_modified=utc_now()))
        self._save_catalog(files)
        self.kv.set(self._payload_key(file_id), "[]")
        logger.info(f"Created file {name!r} ({file_id})")
        return file_id

    def save_file(self, file_id: str, name: str, groups: List[Group]) -> None:
        """Write the groups (raw fields only) and touch the catalog entry"""
        payload = payload_adapter.dump_json(strip_groups(groups), by_alias=True)
        self.kv.set(self._payload_key(file_id), payload.decode("utf-8"))

        files = self.list_files()
        info = StoredFileInfo(id=file_id, name=name, last_modified=utc_now())
        for i, existing in enumerate(files):
            if existing.id == file_id:
                files[i] = info
                break
        else:
            files.append(info)
        self._save_catalog(files)

        player_count = sum(len(g.players) for g in groups)
        logger.info(f"Saved file {name!r} ({file_id}): {len(groups)} groups, {player_count} players")

    def load_file(self, file_id: str) -> Optional[List[Group]]:
        """Groups with derived fields recomputed; None when missing or corrupt"""
        raw = self.kv.get(self._payload_key(file_id))
        if not raw:
            logger.debug(f"No payload for file {file_id}")
            return None
        try:
            stored = payload_adapter.validate_json(raw)
            groups = restore_groups(stored)
        except ValidationError as e:
            logger.warning(f"Payload of file {file_id} unreadable: {e.error_count()} errors")
            return None
        logger.info(f"Loaded file {file_id}: {len(groups)} groups")
        return groups

    def delete_file(self, file_id: str) -> None:
        """Remove payload and catalog entry; unknown ids are ignored"""
        self.kv.remove(self._payload_key(file_id))
        files = [f for f in self.list_files() if f.id != file_id]
        self._save_catalog(files)
        logger.info(f"Deleted file {file_id}")

    def rename_file(self, file_id: str, new_name: str) -> None:
        """Change the catalog name only"""
        files = self.list_files()
        for info in files:
            if info.id == file_id:
                info.name = new_name
                self._save_catalog(files)
                logger.info(f"Renamed file {file_id} to {new_name!r}")
                return
        logger.debug(f"Rename skipped, unknown file {file_id}")
