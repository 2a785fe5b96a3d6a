#!/usr/bin/env python3
"""
Production startup script for the CharityConnect API
"""
import uvicorn
import sys
from charityconnect.core.config import settings
from charityconnect.core.logging import logger
from charityconnect.core.utils import mask_database_url


def main():
    """Start the FastAPI application."""

    logger.info(f"Starting {settings.APP_NAME} Server")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug Mode: {settings.DEBUG}")
    logger.info(f"Database: {mask_database_url(settings.DATABASE_URL) if settings.DATABASE_URL else 'in-memory'}")

    # Configure uvicorn
    config = {
        "app": "charityconnect.main:app",
        "host": settings.HOST,
        "port": settings.PORT,
        "reload": settings.DEBUG,
        "log_level": settings.LOG_LEVEL.lower(),
        "access_log": True,
        "use_colors": settings.DEBUG,
    }

    if not settings.DEBUG and settings.DATABASE_URL:
        # Worker processes only make sense with a shared database
        config.update({
            "workers": settings.WORKERS,
            "lifespan": "on",
        })

    logger.info(f"Starting server on {config['host']}:{config['port']}")

    try:
        uvicorn.run(**config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
