"""Factory helpers for wiring the upstream clients at startup."""

from __future__ import annotations

from app import config
from app.data_sources.credentials import CredentialManager
from app.data_sources.ecowatt_client import SignalFetcher
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


def build_credential_manager(settings: config.Settings | None = None) -> CredentialManager:
    """Instantiate the token client from settings."""
    settings = settings or config.settings
    if not settings.auth_token:
        logger.warning("ECOWATTER_AUTH_TOKEN is empty; token requests will be rejected upstream")
    return CredentialManager(
        settings.token_url,
        settings.auth_token,
        timeout=settings.request_timeout_seconds,
    )


def build_signal_fetcher(settings: config.Settings | None = None) -> SignalFetcher:
    """Instantiate the signals client from settings."""
    settings = settings or config.settings
    logger.info(f"Using Ecowatt API at {settings.api_base_url}")
    return SignalFetcher(settings.api_base_url, timeout=settings.request_timeout_seconds)
