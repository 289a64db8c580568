"""
namereg Application

FastAPI application for the name registration service.
This is the main entry point for running the service:

    uvicorn namereg.transport.app:app
    python -m namereg

Storage is configured via environment variables:
- DATABASE_URL: SQL connection URL; without it names are kept in memory
- REDIS_URL: Redis URL for the /redis/* endpoints

Environment variables can be loaded from a .env file in the project root.
See namereg.config for the full list.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from namereg import __version__
from namereg.config import ServiceSettings, settings_from_env
from namereg.kv import create_key_value_store
from namereg.storage import create_storage
from namereg.transport.context import ServiceContext
from namereg.transport.errors import install_error_handlers
from namereg.transport.routes import router

logger = logging.getLogger(__name__)


def configure_logging(dotenv_path: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL, after loading .env."""
    load_dotenv(dotenv_path)
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


configure_logging()


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Service configuration; read from the environment at
            startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Storage mode is decided here, before the server accepts requests,
        and never revisited.
        """
        resolved = settings or settings_from_env()

        # Startup
        logger.info("Starting namereg...")

        storage = await create_storage(resolved.storage)
        logger.info(f"Storage initialized: {storage.mode.value}")

        kv = await create_key_value_store(resolved.kv)

        app.state.context = ServiceContext(
            settings=resolved,
            storage=storage,
            kv=kv,
        )
        logger.info(f"namereg started (service={resolved.service_id})")

        yield

        # Shutdown
        logger.info("Shutting down namereg...")
        await app.state.context.close()
        logger.info("namereg stopped")

    app = FastAPI(
        title="namereg",
        description="Name registration and key/value counter service",
        version=__version__,
        lifespan=lifespan,
    )
    install_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()
