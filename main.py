import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from database import Settings, build_engine, build_session_factory, init_db
from event_store import EventStore
from security import SessionManager
from errors import register_error_handlers
from routers import auth, events

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        init_db(engine)
        logger.info(f"Marketing calendar ready (auth {'enabled' if settings.AUTH_ENABLED else 'disabled'})")
        yield
        # Shutdown
        engine.dispose()

    app = FastAPI(
        title="Marketing Calendar API",
        description="Calendar of marketing events with session login and roles",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.event_store = EventStore(session_factory)
    app.state.session_manager = SessionManager(session_factory, enabled=settings.AUTH_ENABLED)

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.AUTH_ENABLED:
        if settings.is_production and settings.SECRET_KEY == Settings.model_fields["SECRET_KEY"].default:
            logger.warning("SECRET_KEY is the built-in default; set it in the environment")
        app.add_middleware(
            SessionMiddleware,
            secret_key=settings.SECRET_KEY,
            max_age=settings.SESSION_MAX_AGE,
            same_site="lax",
            https_only=settings.is_production,
        )
        app.include_router(auth.router, prefix="/api", tags=["authentication"])

    app.include_router(events.router, prefix="/api/events", tags=["events"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    # Front end goes last so the API routes take precedence
    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)
