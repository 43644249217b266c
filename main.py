import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import Base, engine
from app.exception_handlers import register_exception_handlers
from app.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from app.plugins.loader import initialize_plugins, shutdown_plugins
from app.plugins.registry import plugin_registry
from app.routes import admin, auth, meta_inspector
from app.services.meta_table import STATIC_URL, TEMPLATE_DIR

setup_structured_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

STATIC_DIR = TEMPLATE_DIR.parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    await initialize_plugins(plugin_registry)
    yield

    logger.info("Shutting down the application...")
    await shutdown_plugins(plugin_registry)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="See all meta data on posts, terms and users",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/auth")
    app.include_router(admin.router, prefix="/admin")
    app.include_router(meta_inspector.router, prefix="/admin/ajax")
    app.mount(STATIC_URL, StaticFiles(directory=str(STATIC_DIR)), name="static")

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")

    return app


app = create_app()


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Meta Inspector"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
