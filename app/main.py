"""FastAPI Configured Sinks Application."""
import functools
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from sinks import SwitchStatusClient

from app.commands import SinkCommands
from app.notifier import EventQueue, RealtimeHub
from app.routes import settings, speakers, switches
from app.scanner import SwitchScanner
from app.snapshot import SnapshotBuilder
from app.store import DocumentStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - runs on startup and shutdown."""
    logger.info("Configured Sinks starting up...")
    store: DocumentStore = app.state.store
    if store.init_document():
        logger.info("Initialized empty configuration document")
    else:
        logger.info(f"Using configuration document {store.path}")
    yield
    logger.info("Configured Sinks shutting down...")


def create_app(settings_override: Optional[dict] = None, client_factory=None) -> FastAPI:
    """
    Build the application and wire its components.

    Args:
        settings_override: Values replacing those from config.get_sinks_settings()
        client_factory: Factory for switch status clients (defaults to SwitchStatusClient)
    """
    sinks_settings = {**config.get_sinks_settings(), **(settings_override or {})}
    if client_factory is None:
        client_factory = functools.partial(SwitchStatusClient, timeout=sinks_settings["scan_timeout"])

    store = DocumentStore(sinks_settings["config_path"])
    scanner = SwitchScanner(client_factory, max_workers=sinks_settings["scan_workers"])
    events = EventQueue()
    commands = SinkCommands(store, SnapshotBuilder(store, scanner), events)

    app = FastAPI(
        title="Configured Sinks",
        description="Switch and speaker configuration for multi-output audio",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store
    app.state.events = events
    app.state.hub = RealtimeHub()
    app.state.commands = commands
    app.state.ui_provider = commands

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(switches.router, prefix="/api", tags=["switches"])
    app.include_router(speakers.router, prefix="/api", tags=["speakers"])
    app.include_router(settings.router, prefix="/api", tags=["settings"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
