"""
Per-entity locks for serialising writes to a single room, bill or student.

Inside one process the registry serialises writers on the same entity; the
services additionally take ``SELECT ... FOR UPDATE`` row locks so that
several worker processes against the same database are serialised too.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Tuple

LockKey = Tuple[str, str]


class _EntityLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class EntityLockRegistry:
    """
    Registry of reference-counted locks keyed by (kind, entity id).

    Locks are created on first use and dropped once no thread holds or
    waits for them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[LockKey, _EntityLock] = {}

    def _acquire_entry(self, key: LockKey) -> _EntityLock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _EntityLock()
            entry.holders += 1
        return entry

    def _release_entry(self, key: LockKey, entry: _EntityLock) -> None:
        with self._guard:
            entry.holders -= 1
            if entry.holders == 0:
                self._locks.pop(key, None)

    @contextmanager
    def hold(self, kind: str, entity_id: str) -> Iterator[None]:
        """Hold the lock for a single entity."""
        with self.hold_many([(kind, entity_id)]):
            yield

    @contextmanager
    def hold_many(self, keys: Iterable[LockKey]) -> Iterator[None]:
        """
        Hold the locks for several entities.

        Keys are de-duplicated and acquired in sorted order so two callers
        asking for overlapping sets cannot deadlock.
        """
        ordered = sorted({(kind, str(entity_id)) for kind, entity_id in keys})
        acquired: List[Tuple[LockKey, _EntityLock]] = []
        try:
            for key in ordered:
                entry = self._acquire_entry(key)
                entry.lock.acquire()
                acquired.append((key, entry))
            yield
        finally:
            for key, entry in reversed(acquired):
                entry.lock.release()
                self._release_entry(key, entry)

    def active_count(self) -> int:
        with self._guard:
            return len(self._locks)

    def holders(self, kind: str, entity_id: str) -> int:
        """Threads holding or waiting for one entity's lock."""
        with self._guard:
            entry = self._locks.get((kind, str(entity_id)))
            return entry.holders if entry else 0


entity_locks = EntityLockRegistry()
