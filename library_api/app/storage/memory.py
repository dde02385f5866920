"""
Process-local book repository.

Useful for tests and for running the API without a database file.
Records are kept in a dict keyed by id (dicts preserve insertion
order) alongside an isbn index.  A single lock serialises every call.
"""

import threading
from typing import Any, Dict, List

from library_api.app.schemas.book import BookRead
from library_api.app.storage.base import (
    BookRepository,
    DuplicateKeyError,
    RecordNotFoundError,
    merge_fields,
)


class InMemoryBookRepository(BookRepository):

    name = "memory"

    def __init__(self) -> None:
        self._books: Dict[int, BookRead] = {}
        self._isbn_index: Dict[str, int] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, fields: Dict[str, Any]) -> BookRead:
        with self._lock:
            book = BookRead(id=self._next_id, **fields)
            if book.isbn in self._isbn_index:
                raise DuplicateKeyError(book.isbn)
            self._books[book.id] = book
            self._isbn_index[book.isbn] = book.id
            self._next_id += 1
            return book.model_copy()

    def get(self, book_id: int) -> BookRead:
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                raise RecordNotFoundError(book_id)
            return book.model_copy()

    def list(self) -> List[BookRead]:
        with self._lock:
            return [book.model_copy() for book in self._books.values()]

    def update(self, book_id: int, fields: Dict[str, Any], partial: bool = True) -> BookRead:
        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                raise RecordNotFoundError(book_id)
            merged = merge_fields(current, fields, partial)
            owner = self._isbn_index.get(merged["isbn"])
            if owner is not None and owner != book_id:
                raise DuplicateKeyError(merged["isbn"])
            book = BookRead(id=book_id, **merged)
            del self._isbn_index[current.isbn]
            self._isbn_index[book.isbn] = book_id
            self._books[book_id] = book
            return book.model_copy()

    def delete(self, book_id: int) -> None:
        with self._lock:
            book = self._books.pop(book_id, None)
            if book is None:
                raise RecordNotFoundError(book_id)
            del self._isbn_index[book.isbn]
