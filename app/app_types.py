"""Shared dataclasses and lightweight types used across modules."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Credential:
    """Bearer token returned by the RTE OAuth endpoint, with the time it was obtained."""
    access_token: str
    token_type: str
    expires_in: int
    obtained_at: dt.datetime  # timezone-aware, UTC

    @property
    def authorization(self) -> str:
        """Value for the Authorization header of signal requests."""
        return f"{self.token_type} {self.access_token}"

    def age_seconds(self, now: Optional[dt.datetime] = None) -> float:
        """Seconds elapsed since the token was obtained."""
        now = now or dt.datetime.now(dt.timezone.utc)
        return (now - self.obtained_at).total_seconds()

    def is_valid(self, lifetime_seconds: int, now: Optional[dt.datetime] = None) -> bool:
        """True until the token's age exceeds the configured lifetime.

        ``expires_in`` reported by the server is deliberately ignored here.
        """
        return self.age_seconds(now) <= lifetime_seconds


@dataclass(frozen=True)
class SignalValue:
    """Grid-stress value for one hourly slot (``pas``) of a day."""
    time_slot: int
    value: int


@dataclass(frozen=True)
class Signal:
    """One day's Ecowatt forecast."""
    generated_at: dt.datetime
    day: dt.datetime  # midnight of the forecast day, upstream offset preserved
    risk_level: int
    message: str
    values: Tuple[SignalValue, ...] = field(default_factory=tuple)

    @property
    def date(self) -> dt.date:
        """Calendar date the signal applies to."""
        return self.day.date()


# Ordered ascending by Signal.day, never mutated once built.
SignalSet = Tuple[Signal, ...]
