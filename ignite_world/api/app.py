"""
FastAPI application for the World database.

The lifespan opens one ``IgniteSession`` for the whole process, logs the
cluster overview, and closes the session on shutdown. These blocking calls run
in the threadpool, off the event loop. A session passed to ``create_app`` is
used as is and left open; its owner closes it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from ignite_world import __version__
from ignite_world.api.routes import router
from ignite_world.config import Settings, get_settings
from ignite_world.diagnostics import log_cluster_overview
from ignite_world.infrastructure.session import IgniteSession, open_session
from ignite_world.utils.logging import get_logger

log = get_logger(__name__)


def create_app(
    session: Optional[IgniteSession] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the application.

    Parameters
    ----------
    session : IgniteSession, optional
        Session to serve from. When omitted, one is opened at startup from
        ``settings``.
    settings : Settings, optional
        Defaults to ``get_settings()``.
    """
    settings = settings or (session.settings if session is not None else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = session is None
        active = session
        if owned:
            active = await run_in_threadpool(open_session, settings)
        app.state.session = active
        try:
            if settings.startup_diagnostics:
                await run_in_threadpool(log_cluster_overview, active)
            log.info("World database API ready", extra={"env": settings.app_env})
            yield
        finally:
            if owned:
                await run_in_threadpool(active.close)

    app = FastAPI(title="Ignite World", version=__version__, lifespan=lifespan)
    app.include_router(router)
    return app


__all__ = ["create_app"]
