"""Record Locks — per-id mutual exclusion for read-validate-write sequences.

Invariants:
    - At most one holder per record id at a time
    - Locks for different ids never block each other
    - The registry lock is held only while looking up / creating a per-id lock

Design Decisions:
    - threading.Lock, not asyncio.Lock: core operations are synchronous and may be
      called from FastAPI's threadpool as well as the event loop
    - Locks are never evicted: record ids are never reused within a process, and
      stores resolve a record before holding its lock, so the registry never
      holds more entries than the store has records
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class RecordLocks:
    """Lazily-created lock per record id."""

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, record_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(record_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[record_id] = lock
            return lock

    @contextmanager
    def hold(self, record_id: str) -> Iterator[None]:
        """Serialize every mutation of record_id inside this block."""
        with self._lock_for(record_id):
            yield

    def __len__(self) -> int:
        return len(self._locks)
