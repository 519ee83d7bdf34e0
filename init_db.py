#!/usr/bin/env python
"""Initialize the database with tables."""

import asyncio

from loguru import logger

from widgetdesk.core.config import get_server_settings
from widgetdesk.core.database import engine, init_models
from widgetdesk.core.logging import configure_logging


async def init_database():
    """Create all database tables."""
    settings = get_server_settings()
    logger.info(f"Initializing database at: {settings.database_url}")

    await init_models()
    logger.info("Database tables created successfully!")

    await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_database())
