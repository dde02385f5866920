"""
Main entrypoint for the Library Books API.

This module assembles the FastAPI application, sets up logging, picks
the storage backend and includes versioned routers.  ``create_app``
builds and configures the app.  It is not instantiated at import time,
so that importing the package never opens a database; serve it with
``run.py`` or through uvicorn's factory mode, e.g.::

    uvicorn library_api.app.main:create_app --factory --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .storage import BookRepository, build_repository


def create_app(repository: Optional[BookRepository] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    repository : Optional[BookRepository]
        Storage to serve books from.  When omitted, the backend named by
        ``settings.storage_backend`` is built (and migrated, for SQLite).

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that repository construction can log.
    setup_logging(settings.log_level, settings.log_file)

    if repository is None:
        repository = build_repository(settings.storage_backend, settings.database_url)
    logging.getLogger(__name__).info("Serving books from %s storage", repository.name)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.repository = repository

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app
