"""ASGI application for the WidgetDesk server."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .api import mount_routes
from .core.config import Settings, get_server_settings
from .core.database import init_models
from .core.logging import configure_logging
from .core.middleware import AuthMiddleware, PrometheusMiddleware
from .core.services import get_note_autosaver


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_server_settings()
    configure_logging(settings.log_level, settings.log_file)
    logger.info(f"Starting {settings.service_name} {__version__}")
    try:
        await init_models()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    yield

    # Drafts still waiting on the debounce delay are written before exit
    flushed = await get_note_autosaver().flush_all()
    logger.info(f"{settings.service_name} stopped ({flushed} draft(s) flushed)")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_server_settings()
    application = FastAPI(
        title=settings.service_name,
        debug=settings.debug,
        version=__version__,
        lifespan=lifespan,
    )

    # The last middleware added is the outermost
    application.add_middleware(PrometheusMiddleware)
    application.add_middleware(AuthMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    mount_routes(application)
    return application


app = create_app()
