"""Client for the RTE OAuth token endpoint."""

from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

import requests

from app.app_types import Credential
from app.data_sources.base import HttpSession
from app.errors import CredentialError
from utils.logging_utils import get_tagged_logger, mask_secret

logger = get_tagged_logger(__name__, tag="data_sources/credentials")


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class CredentialManager:
    """Obtain bearer tokens with a pre-shared ``Basic`` authorization string.

    The manager keeps no state between calls: the caller owns the returned
    credential and decides when it is stale.
    """

    def __init__(
        self,
        token_url: str,
        authorization_token: str,
        *,
        timeout: float = 10.0,
        session: Optional[HttpSession] = None,
        clock: Callable[[], dt.datetime] = _utcnow,
    ) -> None:
        self.token_url = token_url
        self._authorization_token = authorization_token
        self.timeout = timeout
        self.session = session or requests.Session()
        self._clock = clock

    def renew(self) -> Credential:
        """Perform one token request and return the parsed credential."""
        headers = {"Authorization": f"Basic {self._authorization_token}"}
        logger.debug("GET %s (authorization %s)", self.token_url, mask_secret(self._authorization_token))
        try:
            resp = self.session.get(self.token_url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise CredentialError(f"Couldn't GET bearer token endpoint: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise CredentialError(
                f"Bearer token endpoint returned HTTP {resp.status_code}: {(resp.text or '')[:200]}",
                status=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise CredentialError(f"Couldn't decode bearer token response: {(resp.text or '')[:200]}") from exc

        return self._parse(data)

    def _parse(self, data) -> Credential:
        """Map the token payload onto a Credential."""
        if not isinstance(data, dict):
            raise CredentialError(f"Unexpected bearer token payload type: {type(data).__name__}")
        try:
            access_token = data["access_token"]
            token_type = data["token_type"]
            expires_in = int(data["expires_in"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CredentialError(f"Malformed bearer token payload: {exc!r}") from exc
        if not isinstance(access_token, str) or not isinstance(token_type, str) or not access_token:
            raise CredentialError("Malformed bearer token payload: access_token/token_type must be strings")

        return Credential(
            access_token=access_token,
            token_type=token_type,
            expires_in=expires_in,
            obtained_at=self._clock(),
        )
