"""Entry point for the Book Catalog API.

Starts the FastAPI application with uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration (``HOST``, ``PORT``, ``DATA_FILE``, ``LOG_LEVEL`` and
so on) is read from environment variables; see
``book_catalog_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from book_catalog_api.app.core.config import settings
from book_catalog_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Book API listening on http://%s:%s%s/books", settings.host, settings.port, settings.api_prefix
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
