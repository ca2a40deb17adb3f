"""Interfaces for the upstream Ecowatt collaborators driven by the sync loop."""

from __future__ import annotations

from typing import Protocol

from app.app_types import Credential, SignalSet


class CredentialSource(Protocol):
    """Anything that can hand out a fresh bearer credential."""

    def renew(self) -> Credential:
        """Return a new credential or raise ``CredentialError``."""
        ...


class SignalSource(Protocol):
    """Anything that can return the current signal set, sorted by day."""

    def fetch(self, credential: Credential) -> SignalSet:
        """Return the signals ascending by day or raise ``FetchError``."""
        ...


class HttpSession(Protocol):
    """The subset of ``requests.Session`` the clients rely on."""

    def get(self, url: str, *, headers: dict | None = None, timeout: float | None = None):
        ...
