"""Background loop that keeps the signal store in sync with the Ecowatt API.

Each cycle renews the bearer token if it is older than the configured
lifetime, refreshes the signals with it, then waits ``rate_limit + 1``
seconds. Failures are logged and retried on the next cycle; the previous
snapshot keeps being served in the meantime.
"""
from __future__ import annotations

import datetime as dt
import threading
from enum import Enum
from typing import Callable, Optional

from app import config
from app.app_types import Credential
from app.data_sources.base import CredentialSource, SignalSource
from app.data_sources.factory import build_credential_manager, build_signal_fetcher
from app.errors import CredentialError, FetchError
from app.signal_store import SignalStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="sync_loop")


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class CycleOutcome(str, Enum):
    """Result of a single sync cycle."""
    REFRESHED = "refreshed"
    RENEW_FAILED = "renew_failed"
    REFRESH_FAILED = "refresh_failed"


class SyncLoop:
    """Single writer of the signal store."""

    def __init__(
        self,
        credentials: CredentialSource,
        fetcher: SignalSource,
        store: SignalStore,
        *,
        token_lifetime_seconds: int,
        rate_limit_seconds: int,
        stop_event: Optional[threading.Event] = None,
        now: Callable[[], dt.datetime] = _utcnow,
    ) -> None:
        self.credentials = credentials
        self.fetcher = fetcher
        self.store = store
        self.token_lifetime_seconds = token_lifetime_seconds
        self.rate_limit_seconds = rate_limit_seconds
        # A caller-supplied event may be shared; only an event created here is reset on restart.
        self._owns_stop_event = stop_event is None
        self._stop = threading.Event() if stop_event is None else stop_event
        self._now = now
        self._thread: Optional[threading.Thread] = None

        # Owned by the loop thread only.
        self.credential: Optional[Credential] = None
        self.last_call_at: Optional[dt.datetime] = None

    @property
    def sleep_seconds(self) -> int:
        return self.rate_limit_seconds + 1

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def credential_is_stale(self) -> bool:
        """True when no token was ever obtained or it outlived the configured lifetime."""
        if self.credential is None:
            return True
        return not self.credential.is_valid(self.token_lifetime_seconds, self._now())

    def _renew_if_stale(self) -> bool:
        """Renew the token when needed; return False if renewal failed."""
        if not self.credential_is_stale():
            logger.info("Bearer token is still valid...")
            return True

        logger.info("Retrieving a new bearer token...")
        try:
            self.credential = self.credentials.renew()
        except CredentialError as exc:
            logger.error("Couldn't retrieve a bearer token: %s", exc)
            return False
        logger.info("Done.")
        return True

    def _refresh(self) -> bool:
        """Fetch signals and install them; return False if the fetch failed."""
        if self.credential is None:
            # unreachable after a successful renewal, kept as a hard stop
            raise RuntimeError("refresh attempted without a bearer token")
        try:
            signals = self.fetcher.fetch(self.credential)
        except FetchError as exc:
            logger.error("Couldn't update signals: %s", exc)
            return False

        self.store.replace(signals)
        self.last_call_at = self._now()
        logger.info("Installed %d signals (last call at %s)", len(signals), self.last_call_at.isoformat())
        return True

    def run_cycle(self) -> CycleOutcome:
        """Run one renew-if-stale / refresh cycle without sleeping."""
        logger.info("Updating signals...")
        if not self._renew_if_stale():
            return CycleOutcome.RENEW_FAILED
        if not self._refresh():
            return CycleOutcome.REFRESH_FAILED
        return CycleOutcome.REFRESHED

    def run_forever(self) -> None:
        """Cycle until ``stop()`` is called; the stop signal also cuts the sleep short."""
        logger.info("Sync loop started (sleep %ds, token lifetime %ds)",
                    self.sleep_seconds, self.token_lifetime_seconds)
        while not self._stop.is_set():
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Unexpected error during sync cycle")
            logger.info("Done. Sleeping %d seconds...", self.sleep_seconds)
            if self._stop.wait(self.sleep_seconds):
                break
        logger.info("Sync loop stopped")

    def start(self) -> threading.Thread:
        """Run the loop in a daemon thread.

        An already-set external stop event is left alone, so the thread exits
        without running a cycle.
        """
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        if self._owns_stop_event:
            self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="ecowatt-sync", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the loop to exit and wait for the thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Sync thread did not stop within %ss", timeout)
            else:
                self._thread = None


def build_sync_loop(store: SignalStore, settings: config.Settings | None = None) -> SyncLoop:
    """Wire a SyncLoop from settings around an existing store."""
    settings = settings or config.settings
    return SyncLoop(
        build_credential_manager(settings),
        build_signal_fetcher(settings),
        store,
        token_lifetime_seconds=settings.token_lifetime_seconds,
        rate_limit_seconds=settings.rate_limit_seconds,
    )
