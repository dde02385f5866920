"""
Business logic for books.

``BookService`` wraps an injected ``BookRepository`` and exposes one
coroutine per verb.  It holds no state of its own beyond the
repository reference, so tests can hand it an in-memory store.

Storage exceptions are translated into the service error taxonomy from
``core.errors``:

* ``DuplicateKeyError`` -> ``ConflictError``
* ``RecordNotFoundError`` -> ``ResourceNotFound``
* ``StorageUnavailableError`` -> ``ServiceUnavailable``

Both update verbs keep fields the client left out at their stored
value.  PUT therefore behaves exactly like PATCH; see DESIGN.md.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from library_api.app.core.errors import (
    ConflictError,
    ResourceNotFound,
    ServiceUnavailable,
    ValidationError,
)
from library_api.app.schemas.book import BookCreate, BookRead, BookUpdate
from library_api.app.storage.base import (
    BookRepository,
    DuplicateKeyError,
    RecordNotFoundError,
    StorageError,
)


logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except DuplicateKeyError as exc:
        raise ConflictError(str(exc)) from exc
    except RecordNotFoundError as exc:
        raise ResourceNotFound(str(exc)) from exc
    except StorageError as exc:
        raise ServiceUnavailable(f"Storage backend unavailable: {exc}") from exc
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class BookService:
    """Service for managing books."""

    def __init__(self, repository: BookRepository) -> None:
        self.repository = repository

    async def list_books(self) -> List[BookRead]:
        with _storage_errors():
            return self.repository.list()

    async def create_book(self, data: BookCreate) -> BookRead:
        """Store a new book and return it with its assigned id."""
        with _storage_errors():
            book = self.repository.create(data.model_dump())
        logger.info("Created book %s (isbn %s)", book.id, book.isbn)
        return book

    async def get_book(self, book_id: int) -> BookRead:
        with _storage_errors():
            return self.repository.get(book_id)

    async def update_book(self, book_id: int, data: BookUpdate) -> BookRead:
        """Update a book in response to PUT.

        Each field falls back to the stored value when absent from the
        payload.  The merge happens inside a single repository call so a
        concurrent write to another field is not overwritten.  An unknown
        id is reported before any payload problem.
        """
        with _storage_errors():
            self.repository.get(book_id)
            changes = data.changes()
            book = self.repository.update(book_id, changes, partial=True)
        logger.info("Updated book %s: %s", book_id, sorted(changes))
        return book

    async def partial_update_book(self, book_id: int, data: BookUpdate) -> BookRead:
        """Apply only the fields present in the payload (PATCH)."""
        with _storage_errors():
            self.repository.get(book_id)
            changes = data.changes()
            book = self.repository.update(book_id, changes, partial=True)
        logger.info("Partially updated book %s: %s", book_id, sorted(changes))
        return book

    async def delete_book(self, book_id: int) -> None:
        with _storage_errors():
            self.repository.delete(book_id)
        logger.info("Deleted book %s", book_id)
