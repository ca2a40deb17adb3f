"""Upstream Ecowatt clients and the factories that wire them from settings."""

from .base import CredentialSource, HttpSession, SignalSource
from .credentials import CredentialManager
from .ecowatt_client import SignalFetcher, parse_signal, parse_signals
from .factory import build_credential_manager, build_signal_fetcher

__all__ = [
    "build_credential_manager",
    "build_signal_fetcher",
    "CredentialManager",
    "CredentialSource",
    "HttpSession",
    "SignalFetcher",
    "SignalSource",
    "parse_signal",
    "parse_signals",
]
