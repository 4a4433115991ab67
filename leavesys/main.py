"""LeaveSys API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LeaveSysError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Runtime built and initial Snapshot load attempted on startup; a failed
      initial load does not stop the process (readiness reports it)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests inject a Runtime backed by httpx.MockTransport
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leavesys.api.error_handlers import register_error_handlers
from leavesys.api.routes import actions, health, views
from leavesys.config import Settings, get_settings
from leavesys.infrastructure.observability import setup_logging
from leavesys.services.runtime import build_runtime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if getattr(app.state, "runtime", None) is None:
        app.state.runtime = build_runtime(settings)
    runtime = app.state.runtime
    result = await runtime.controller.start()
    logger.info(
        f"LeaveSys API started against {settings.remote_base_url}",
        extra={"outcome": result.outcome.value, "epoch": result.epoch},
    )
    yield
    logger.info("LeaveSys API shutting down")
    await runtime.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="LeaveSys API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.runtime = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(views.router)
    app.include_router(actions.router)

    register_error_handlers(app)
    return app


app = create_app()
