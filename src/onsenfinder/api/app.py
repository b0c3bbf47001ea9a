"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from onsenfinder import __version__
from onsenfinder.adapters.base.adapter import DocumentStore
from onsenfinder.adapters.base.exceptions import AdapterError
from onsenfinder.adapters.elasticsearch.adapter import ElasticsearchStore
from onsenfinder.api.deps import set_service
from onsenfinder.api.router import router as onsen_router
from onsenfinder.config.settings import EngineSettings, Settings
from onsenfinder.core.service import OnsenService
from onsenfinder.observability.logging import setup_logging

logger = logging.getLogger(__name__)

GREETING = "Let's try FastAPI + Elasticsearch!"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # ONSENFINDER_CONFIG_FILE is exported by the CLI; else auto-detect in cwd
        yaml_path = Path(os.environ.get("ONSENFINDER_CONFIG_FILE", "onsenfinder-config.yaml"))
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        logger.info("Starting %s v%s", settings.app_name, __version__)

        store = build_store(settings.engine)
        await store.initialize()
        if settings.engine.provision_on_startup:
            await provision_index(store)

        service = OnsenService(store, search_size=settings.engine.search_size)
        set_service(service)

        app.state.settings = settings
        app.state.service = service

        logger.info("Onsen Finder is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down Onsen Finder...")
        set_service(None)
        await store.shutdown()
        logger.info("Onsen Finder shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="REST resource service for onsen facilities, backed by Elasticsearch.",
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def index() -> str:
        return GREETING

    app.include_router(onsen_router)

    return app


def build_store(engine: EngineSettings) -> DocumentStore:
    """Construct the Elasticsearch store from engine settings."""
    return ElasticsearchStore(
        hosts=engine.hosts,
        index=engine.index,
        username=engine.username,
        password=engine.password,
        api_key=engine.api_key,
        verify_certs=engine.verify_certs,
        request_timeout=engine.request_timeout,
        max_retries=engine.max_retries,
        retry_on_timeout=engine.retry_on_timeout,
        analyzer=engine.analyzer,
        refresh=engine.refresh,
    )


async def provision_index(store: DocumentStore) -> bool:
    """Create the onsen index at startup.

    Safe to run on every start. A failure is logged and swallowed so the
    server still comes up; requests will then fail individually.

    Returns:
        True if the index was created by this call.
    """
    try:
        created = await store.provision()
    except AdapterError:
        logger.warning("Failed to provision index '%s'", store.index_name, exc_info=True)
        return False
    if created:
        logger.info("Provisioned index '%s'", store.index_name)
    return created
