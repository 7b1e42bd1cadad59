"""
Local multi-file store

Key/value backends, the file catalog and the debounced auto-saver
"""

from .kv import KeyValueStore, MemoryStore, DirectoryStore
from .schemas import StoredFileInfo, StoredPlayer, StoredGroup
from .persistence import PersistenceStore, generate_file_id, strip_groups, restore_groups
from .autosave import AutoSaver
from .config import storage_config, autosave_config, logging_config

__all__ = [
    # Backends
    "KeyValueStore",
    "MemoryStore",
    "DirectoryStore",
    # Schemas
    "StoredFileInfo",
    "StoredPlayer",
    "StoredGroup",
    # Catalog
    "PersistenceStore",
    "generate_file_id",
    "strip_groups",
    "restore_groups",
    "AutoSaver",
    # Settings
    "storage_config",
    "autosave_config",
    "logging_config",
]
