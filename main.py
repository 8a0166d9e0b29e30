import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vidshare.config import settings
from vidshare.database import init_models
from vidshare.exception_handlers import register_exception_handlers
from vidshare.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from vidshare.routes import auth, channels, playlists, users, videos
from vidshare.utils.session import close_view_session_store

setup_structured_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

ROUTERS = [
    (auth.router, "/auth"),
    (videos.router, "/videos"),
    (users.router, "/users"),
    (channels.router, "/channels"),
    (playlists.router, "/playlists"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    await init_models()

    yield

    logger.info("Shutting down the application...")
    await close_view_session_store()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="A video sharing backend powered by FastAPI",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    # Served both at the root and under /api, which is where the web client calls them
    for router, prefix in ROUTERS:
        app.include_router(router, prefix=prefix)
        app.include_router(router, prefix=f"/api{prefix}")

    @app.get("/health", tags=["Monitoring"])
    async def health_check():
        return {"status": "ok"}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements

    return app


app = create_app()
