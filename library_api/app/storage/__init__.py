"""
Book storage backends.

The service layer only talks to ``BookRepository``; ``build_repository``
picks the concrete backend named in the settings.
"""

from typing import Optional

from library_api.app.storage.base import (  # noqa: F401
    BookRepository,
    DuplicateKeyError,
    RecordNotFoundError,
    StorageError,
    StorageUnavailableError,
)
from library_api.app.storage.memory import InMemoryBookRepository
from library_api.app.storage.sqlite import SQLiteBookRepository


def build_repository(backend: str, database_url: Optional[str] = None) -> BookRepository:
    """Instantiate the repository for ``backend`` (``sqlite`` or ``memory``)."""
    if backend == "memory":
        return InMemoryBookRepository()
    if backend == "sqlite":
        return SQLiteBookRepository(database_url)
    raise ValueError(f"Unknown storage backend: {backend!r}")
