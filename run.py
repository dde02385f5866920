"""Entry point for serving the Library Books API.

Builds the application through ``create_app`` and serves it with
Uvicorn.  Host and port come from the ``HOST`` and ``PORT``
environment variables (defaults ``0.0.0.0`` and ``8000``); the storage
backend and database path are read by ``core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from library_api.app.core.config import settings
from library_api.app.main import create_app


async def run_api() -> None:
    """Start the API server using Uvicorn."""
    config = Config(
        app=create_app(),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")


if __name__ == "__main__":
    main()
