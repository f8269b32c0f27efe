#!/usr/bin/env python3
"""
Script to run the Bookshelf API server.
"""

import uvicorn

from bookshelf.config import settings
from utilities.logger import setup_logging, get_logger


def main():
    """Run the API server."""
    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        debug=settings.debug
    )

    logger = get_logger(__name__)
    logger.info(
        "Starting Bookshelf API server",
        host=settings.host,
        port=settings.port,
        debug=settings.debug
    )

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=False
    )


if __name__ == "__main__":
    main()
