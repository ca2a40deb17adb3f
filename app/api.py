"""HTTP API exposing the cached Ecowatt signals."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from .config import Settings
from .errors import NotReadyError, OutOfRangeError
from .models import SignalModel, signal_set_to_models
from .signal_store import SignalStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")


def get_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_signal_store(request: Request) -> SignalStore:
    """Store shared with the sync loop."""
    return request.app.state.signal_store


def require_api_key(
    settings: Settings = Depends(get_settings),
    x_api_key: str | None = Header(default=None),
):
    """
    Validate the X-API-Key header against the api_key setting.
    """
    # If no key is configured, allow requests (dev/default mode).
    if not settings.api_key:
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])


def _not_ready(exc: NotReadyError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("/signals", response_model=list[SignalModel])
def list_signals(store: SignalStore = Depends(get_signal_store)):
    """Return every cached signal, earliest day first."""
    try:
        signals = store.get_all()
    except NotReadyError as exc:
        raise _not_ready(exc)
    return signal_set_to_models(signals)


@router.get("/signals/{day}", response_model=SignalModel)
def get_day_signal(day: int, store: SignalStore = Depends(get_signal_store)):
    """Return the signal at offset ``day`` (0 = today)."""
    try:
        signal = store.get_by_day(day)
    except NotReadyError as exc:
        raise _not_ready(exc)
    except OutOfRangeError as exc:
        logger.debug(f"Day {day} requested, {exc.available} available")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return SignalModel.from_signal(signal)
