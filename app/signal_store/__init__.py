"""Signal snapshot storage."""

from .base import SignalStore
from .memory import InMemorySignalStore

__all__ = [
    "SignalStore",
    "InMemorySignalStore",
]
