"""FastAPI application setup for the ecowatter service."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from .api import router as api_router
from .config import Settings, settings as default_settings
from .models import HealthResponse
from .signal_store import InMemorySignalStore, SignalStore
from .sync_loop import SyncLoop, build_sync_loop
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/main")

SHUTDOWN_TIMEOUT_SECONDS = 5.0


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[SignalStore] = None,
    sync_loop: Optional[SyncLoop] = None,
) -> FastAPI:
    """Build the app; the sync loop runs for the lifetime of the ASGI server."""
    settings = settings or default_settings
    store = store if store is not None else InMemorySignalStore()
    if sync_loop is None:
        sync_loop = build_sync_loop(store, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.start_sync:
            sync_loop.start()
        else:
            logger.info("Background sync disabled (ECOWATTER_START_SYNC=false)")
        try:
            yield
        finally:
            sync_loop.stop(timeout=SHUTDOWN_TIMEOUT_SECONDS)
            store.clear()

    app = FastAPI(title="Ecowatter", lifespan=lifespan)
    app.state.settings = settings
    app.state.signal_store = store
    app.state.sync_loop = sync_loop

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        """Liveness probe; `ready` turns true after the first successful fetch."""
        return HealthResponse(ready=request.app.state.signal_store.is_ready)

    # Unprefixed paths match the routes served by earlier releases.
    app.include_router(api_router)
    app.include_router(api_router, prefix="/v1")
    return app


app = create_app()
