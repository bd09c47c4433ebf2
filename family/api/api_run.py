from fastapi import FastAPI, Request, Query
from fastapi.responses import JSONResponse

from pathlib import Path
from typing import Optional, Union
import logging

from family.api.state import DashboardState
from family.infra.Key_Value_Store import KeyValueStore
from family.infra.paths import STORE_FILE
from family.utilities.config import ADMIN_PASSWORD, SESSION_TIMEOUT_MS
from family.utilities.errors import ValidationError, AuthError
from family.utilities.timeutils import Clock, system_clock
from family.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from family.api.routes import auth, dashboard, admin

# Logging
logger = logging.getLogger("family_app")


def create_app(store: Optional[Union[KeyValueStore, str, Path]] = None,
               clock: Clock = system_clock,
               admin_password: str = ADMIN_PASSWORD,
               timeout_ms: int = SESSION_TIMEOUT_MS) -> FastAPI:
    """Build the dashboard API around one store (the configured store file by default)."""
    if store is None:
        store = KeyValueStore(STORE_FILE)
    elif not isinstance(store, KeyValueStore):
        store = KeyValueStore(store)

    app = FastAPI(title="Family Dashboard API")
    app.state.dashboard = DashboardState(store=store, clock=clock,
                                         admin_password=admin_password, timeout_ms=timeout_ms)

    # Include routers
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(admin.router)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(AuthError)
    async def _auth_error(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.get('/api/notifications')
    def api_notifications(
        since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
    ):
        """
        Return recent dashboard events for toast notifications.

        Client polling strategy:
            1. First call without 'since' to load the current backlog.
            2. Store 'next_cursor' from the response.
            3. Subsequent polls: /api/notifications?since=<next_cursor>
        """
        return get_web_events(since)

    @app.get('/api/health')
    def health():
        return {"status": "ok", "store": str(store.path)}

    # Web observers for toast events
    start_event_observers()
    logger.info("Family dashboard ready (store=%s)", store.path)
    return app


app = create_app()
