"""
Storage interface for books.

``BookRepository`` is the contract the service layer depends on.  Each
call is atomic on its own; in particular the isbn uniqueness check and
the write that follows it must not interleave with another writer.
Implementations raise the exceptions below and nothing else.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from library_api.app.schemas.book import BookRead


BOOK_FIELDS = ("title", "author", "published_date", "isbn", "available")


class StorageError(Exception):
    """Base class for repository failures."""


class DuplicateKeyError(StorageError):
    def __init__(self, isbn: str) -> None:
        self.isbn = isbn
        super().__init__(f"Book with isbn {isbn} already exists")


class RecordNotFoundError(StorageError):
    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class StorageUnavailableError(StorageError):
    """The backing store could not be reached or failed mid-operation."""


class BookRepository(ABC):
    """Abstract durable record store for books."""

    name: str = "abstract"

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> BookRead:
        """Insert a new book and return it with its assigned ``id``."""

    @abstractmethod
    def get(self, book_id: int) -> BookRead:
        ...

    @abstractmethod
    def list(self) -> List[BookRead]:
        """Return every stored book in insertion order."""

    @abstractmethod
    def update(self, book_id: int, fields: Dict[str, Any], partial: bool = True) -> BookRead:
        """Change an existing book.

        With ``partial`` the given fields are merged over the stored
        record.  Otherwise every field in ``BOOK_FIELDS`` is replaced and
        all of them must be present.
        """

    @abstractmethod
    def delete(self, book_id: int) -> None:
        ...


def merge_fields(current: BookRead, fields: Dict[str, Any], partial: bool) -> Dict[str, Any]:
    """Compute the stored field set that results from an update."""
    unknown = set(fields) - set(BOOK_FIELDS)
    if unknown:
        raise ValueError(f"Unknown book fields: {', '.join(sorted(unknown))}")
    if partial:
        merged = current.model_dump(include=set(BOOK_FIELDS))
        merged.update(fields)
        return merged
    missing = [name for name in BOOK_FIELDS if name not in fields]
    if missing:
        raise ValueError(f"Full update requires fields: {', '.join(missing)}")
    return {name: fields[name] for name in BOOK_FIELDS}
