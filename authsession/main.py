"""
FastAPI application factory.

Assembles the app, builds the one SessionManager it serves, registers
all routers, and wires the expiry sweeper to the lifecycle events.
Sessions live in process memory; a restart logs everybody out.
"""

import logging

from fastapi import FastAPI

from authsession.controllers.admin_controller import router as admin_router
from authsession.controllers.auth_controller import router as auth_router
from authsession.controllers.session_controller import router as session_router
from authsession.core.clock import Clock
from authsession.core.config import Settings
from authsession.core.config import settings as default_settings
from authsession.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    clock: Clock | None = None,
    session_manager: SessionManager | None = None,
) -> FastAPI:
    settings = settings or default_settings

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.session_manager = session_manager or SessionManager(settings, clock=clock)

    # ── Register routers ─────────────────────────────────────────────
    app.include_router(auth_router)
    app.include_router(session_router)
    app.include_router(admin_router)

    # ── Startup / Shutdown ───────────────────────────────────────────
    @app.on_event("startup")
    async def on_startup() -> None:
        await app.state.session_manager.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.session_manager.shutdown()
        logger.info("Session manager shut down.")

    # ── Health check ─────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
