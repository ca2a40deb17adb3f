"""Shared protocol for signal snapshot stores."""

from typing import Iterable, Protocol

from app.app_types import Signal, SignalSet


class SignalStore(Protocol):
    """Protocol for the holder of the latest signal snapshot."""

    @property
    def is_ready(self) -> bool:
        """True once a snapshot has been installed."""

    def replace(self, signals: Iterable[Signal]) -> None:
        """Install a new snapshot, discarding the previous one."""

    def get_all(self) -> SignalSet:
        """Return the current snapshot or raise ``NotReadyError``."""

    def get_by_day(self, day: int) -> Signal:
        """Return the signal at positional offset ``day`` of the current snapshot."""

    def clear(self) -> None:
        """Drop the current snapshot."""
