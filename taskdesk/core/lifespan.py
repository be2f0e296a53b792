"""Application lifespan: startup and shutdown.

Wiring only: logging setup on startup, SQL engine dispose on shutdown.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskdesk.core.config import get_settings
from taskdesk.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the database engine."""
    setup_logging()
    settings = get_settings()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    from taskdesk.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
