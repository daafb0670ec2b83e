"""FastAPI application factory with lifespan startup/shutdown."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from files_manager.api.routes import status
from files_manager.config import AppConfig, load_config
from files_manager.logging_config import configure_logging
from files_manager.store.db_client import managed_db_client


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or load_config()
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the DBClient on startup; close it on shutdown."""
        async with managed_db_client(config.db) as db_client:
            app.state.db_client = db_client
            yield

    app = FastAPI(
        title="Files Manager",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(status.router)
    return app


app = create_app()
