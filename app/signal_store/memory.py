"""In-memory signal store holding one immutable snapshot."""

import threading
from typing import Iterable, Optional

from app.app_types import Signal, SignalSet
from app.errors import NotReadyError, OutOfRangeError
from app.signal_store.base import SignalStore

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="signal_store/in_memory_signal_store")


class InMemorySignalStore(SignalStore):
    """Thread-safe store for the latest signal set.

    The snapshot is an immutable tuple that is swapped wholesale, so the lock
    only guards the reference: readers copy it and work on their copy, and the
    single writer never waits behind anything longer than that copy.
    """

    def __init__(self, signals: Optional[Iterable[Signal]] = None) -> None:
        logger.debug("Initializing InMemorySignalStore")
        self._lock = threading.Lock()
        self._snapshot: Optional[SignalSet] = tuple(signals) if signals is not None else None

    def _current(self) -> SignalSet:
        """Return the current snapshot reference or raise NotReadyError."""
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            raise NotReadyError()
        return snapshot

    @property
    def is_ready(self) -> bool:
        """True once a snapshot has been installed."""
        with self._lock:
            return self._snapshot is not None

    def replace(self, signals: Iterable[Signal]) -> None:
        """Install a new snapshot atomically."""
        # Build outside the lock; only the swap is guarded.
        snapshot = tuple(signals)
        with self._lock:
            self._snapshot = snapshot
        logger.debug("Installed snapshot with %d signals", len(snapshot))

    def get_all(self) -> SignalSet:
        """Return the full current snapshot."""
        return self._current()

    def get_by_day(self, day: int) -> Signal:
        """Return the signal at offset ``day`` (0 = earliest day available)."""
        snapshot = self._current()
        if not 0 <= day < len(snapshot):
            raise OutOfRangeError(day, len(snapshot))
        return snapshot[day]

    def clear(self) -> None:
        """Forget the current snapshot."""
        with self._lock:
            self._snapshot = None
