#!/usr/bin/env python3
"""WidgetDesk launcher script."""

import sys

import uvicorn
from loguru import logger

from widgetdesk.core.config import get_server_settings
from widgetdesk.core.logging import configure_logging


def main():
    """Main entry point."""
    settings = get_server_settings()
    configure_logging(settings.log_level, settings.log_file)

    try:
        logger.info(
            f"Starting WidgetDesk server on {settings.api_host}:{settings.api_port}..."
        )
        uvicorn.run(
            "widgetdesk.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.reload,
            log_level=settings.log_level.lower(),
        )
    except Exception as e:
        logger.error(f"Error running WidgetDesk: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
