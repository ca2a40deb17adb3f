"""Exception taxonomy shared by the upstream clients, the store and the API."""

from __future__ import annotations

from typing import Optional


class EcowatterError(Exception):
    """Base class for every error raised by the service."""


class CredentialError(EcowatterError):
    """The bearer token could not be obtained from the token endpoint."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class FetchError(EcowatterError):
    """The signals endpoint call failed.

    ``kind`` is one of ``"status"`` (non-success HTTP status, see ``status``),
    ``"transport"`` (connection/timeout) or ``"decode"`` (body did not match
    the expected schema). The underlying exception, if any, is ``__cause__``.
    """

    STATUS = "status"
    TRANSPORT = "transport"
    DECODE = "decode"

    def __init__(self, message: str, *, kind: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status


class NotReadyError(EcowatterError):
    """No signal set has been installed yet."""

    def __init__(self, message: str = "Signals have not been fetched yet") -> None:
        super().__init__(message)


class OutOfRangeError(EcowatterError):
    """Requested day offset is outside the current snapshot."""

    def __init__(self, day: int, available: int) -> None:
        super().__init__(f"Day {day} does not exist in signals (available: 0..{available - 1})"
                         if available else f"Day {day} does not exist in signals (none available)")
        self.day = day
        self.available = available
