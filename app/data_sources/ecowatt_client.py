"""Helpers for fetching electricity-grid signals from the RTE Ecowatt API."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

import requests

from app.app_types import Credential, Signal, SignalSet, SignalValue
from app.data_sources.base import HttpSession
from app.errors import FetchError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ecowatt_client")

SIGNALS_PATH = "signals"


def _iso_to_dt(s: str) -> dt.datetime:
    """Parse an Ecowatt ISO 8601 timestamp; naive values are taken as UTC."""
    parsed = dt.datetime.fromisoformat(s)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _as_int(entry: dict, key: str) -> int:
    """Return an integer field, rejecting floats, booleans and numeric strings."""
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return value


def _parse_value(entry: dict) -> SignalValue:
    if not isinstance(entry, dict):
        raise TypeError(f"value entry must be an object, got {type(entry).__name__}")
    return SignalValue(time_slot=_as_int(entry, "pas"), value=_as_int(entry, "hvalue"))


def parse_signal(entry: dict) -> Signal:
    """Convert one upstream signal entry into a Signal.

    Raises KeyError/TypeError/ValueError when the entry does not match the
    expected schema.
    """
    if not isinstance(entry, dict):
        raise TypeError(f"signal entry must be an object, got {type(entry).__name__}")
    values = entry.get("values") or []
    message = entry.get("message", "")
    if not isinstance(message, str):
        raise TypeError(f"message must be a string, got {type(message).__name__}")
    return Signal(
        generated_at=_iso_to_dt(entry["GenerationFichier"]),
        day=_iso_to_dt(entry["jour"]),
        risk_level=_as_int(entry, "dvalue"),
        message=message,
        values=tuple(_parse_value(v) for v in values),
    )


def parse_signals(payload) -> SignalSet:
    """Decode the ``{"signals": [...]}`` wrapper and sort the entries by day."""
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object, got {type(payload).__name__}")
    entries = payload["signals"]
    if not isinstance(entries, list):
        raise TypeError(f"'signals' must be a list, got {type(entries).__name__}")
    out: List[Signal] = [parse_signal(e) for e in entries]
    out.sort(key=lambda s: s.day)
    return tuple(out)


class SignalFetcher:
    """Fetch the current Ecowatt signals with a bearer credential."""

    def __init__(self, base_url: str, *, timeout: float = 10.0, session: Optional[HttpSession] = None) -> None:
        self.url = f"{base_url.rstrip('/')}/{SIGNALS_PATH}"
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, credential: Credential) -> SignalSet:
        """GET the signals endpoint once and return the signals ascending by day."""
        headers = {"Authorization": credential.authorization}
        logger.info("GET %s...", self.url)
        try:
            resp = self.session.get(self.url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise FetchError(f"Couldn't GET signals: {exc}", kind=FetchError.TRANSPORT) from exc

        if not 200 <= resp.status_code < 300:
            raise FetchError(
                f"Non-OK HTTP status: {resp.status_code}",
                kind=FetchError.STATUS,
                status=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(f"Couldn't decode signals body: {(resp.text or '')[:200]}",
                             kind=FetchError.DECODE) from exc

        try:
            signals = parse_signals(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Unexpected signals payload: {exc!r}", kind=FetchError.DECODE) from exc

        logger.debug("Decoded %d signals", len(signals))
        return signals
