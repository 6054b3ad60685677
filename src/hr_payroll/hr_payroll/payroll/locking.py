from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator

from ..common.logging_config import get_logger
from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import ConcurrentUpdateError

logger = get_logger("payroll.locking")


class KeyedLockRegistry:
    """One advisory lock per payslip key, held across the read-then-write.

    In-process only; across processes the storage unique key is what stops
    a duplicate create.
    """

    def __init__(self, *, timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout_seconds)
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            self._holders[key] = self._holders.get(key, 0) + 1
            return lock

    def _release_ref(self, key: Hashable) -> None:
        with self._guard:
            remaining = self._holders.get(key, 1) - 1
            if remaining <= 0:
                self._holders.pop(key, None)
                self._locks.pop(key, None)
            else:
                self._holders[key] = remaining

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._lock_for(key)
        try:
            if not lock.acquire(timeout=self._timeout):
                logger.warning("payslip_key_busy", extra={"key": repr(key), "timeout_seconds": self._timeout})
                raise ConcurrentUpdateError(f"Another payroll operation is in progress for {key!r}; retry later")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._release_ref(key)

    def is_locked(self, key: Hashable) -> bool:
        with self._guard:
            lock = self._locks.get(key)
        return bool(lock and lock.locked())
