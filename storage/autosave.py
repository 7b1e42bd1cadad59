"""
Debounced auto-save

Rapid edits restart a quiet-window timer; only the latest state is written
when the window elapses.
"""

import asyncio
from typing import List, Optional

from loguru import logger

from records import Group

from .config import autosave_config
from .persistence import PersistenceStore


class AutoSaver:
    """Coalesces successive saves of one file into a single write"""

    def __init__(
        self,
        store: PersistenceStore,
        file_id: str,
        name: str,
        delay: Optional[float] = None,
    ):
        self.store = store
        self.file_id = file_id
        self.name = name
        self.delay = autosave_config.delay_seconds if delay is None else delay
        self._pending: Optional[List[Group]] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self.save_count = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, groups: List[Group], name: Optional[str] = None) -> None:
        """Remember the latest groups and restart the timer (needs a running loop)"""
        if name is not None:
            self.name = name
        self._pending = groups
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self.flush)

    def flush(self) -> bool:
        """Write pending groups now; False when there was nothing to write"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is None:
            return False
        groups, self._pending = self._pending, None
        self.store.save_file(self.file_id, self.name, groups)
        self.save_count += 1
        return True

    def cancel(self) -> None:
        """Drop pending state without writing"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is not None:
            logger.debug(f"Discarded pending save of file {self.file_id}")
        self._pending = None
