"""
Key/value backends

The file catalog only needs get / set / remove over string keys.
"""

import os
import tempfile
from typing import Dict, Optional, Protocol, runtime_checkable
from urllib.parse import quote, unquote

from loguru import logger


@runtime_checkable
class KeyValueStore(Protocol):
    """String key → string value store with atomic per-key writes"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store (tests, scratch sessions)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class DirectoryStore:
    """
    One file per key inside a directory

    Keys are percent-encoded into file names. Writes go to a temp file that
    replaces the target, so readers never see a half-written value.
    """

    SUFFIX = ".json"

    def __init__(self, root: str):
        self.root = root
        os.makedirs(root, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.root, quote(key, safe="") + self.SUFFIX)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            logger.warning(f"Key {key} is not valid UTF-8, treating as missing: {e.reason}")
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.root, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug(f"Wrote key {key} ({len(value)} chars)")

    def remove(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass

    def keys(self):
        return [
            unquote(name[: -len(self.SUFFIX)])
            for name in os.listdir(self.root)
            if name.endswith(self.SUFFIX)
        ]
