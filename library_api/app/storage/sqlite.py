"""
SQLite-backed book repository.

Every call opens its own connection through ``core.db`` and runs in a
single transaction.  Uniqueness of ``isbn`` is enforced by the
``UNIQUE`` constraint on the ``books`` table, so concurrent creates
cannot both succeed.  ``sqlite3`` errors are translated into the
storage exceptions from ``storage.base``.

All queries use parameterized statements.
"""

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from library_api.app.core.db import get_cursor, init_db
from library_api.app.schemas.book import BookRead
from library_api.app.storage.base import (
    BookRepository,
    DuplicateKeyError,
    RecordNotFoundError,
    StorageUnavailableError,
    merge_fields,
)


# Largest value an INTEGER PRIMARY KEY can hold.
_MAX_ROWID = 2 ** 63 - 1

_SELECT = "SELECT id, title, author, published_date, isbn, available FROM books"


class SQLiteBookRepository(BookRepository):

    name = "sqlite"

    def __init__(self, database_url: Optional[str] = None, migrate: bool = True) -> None:
        self.database_url = database_url
        if migrate:
            with self._translate_errors():
                init_db(database_url)

    @contextmanager
    def _cursor(self, isbn: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
        with self._translate_errors(isbn):
            with get_cursor(self.database_url) as cursor:
                yield cursor

    @staticmethod
    @contextmanager
    def _translate_errors(isbn: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except sqlite3.IntegrityError as exc:
            if isbn is not None and "isbn" in str(exc):
                raise DuplicateKeyError(isbn) from exc
            raise StorageUnavailableError(str(exc)) from exc
        except sqlite3.Error as exc:
            raise StorageUnavailableError(str(exc)) from exc

    def create(self, fields: Dict[str, Any]) -> BookRead:
        book = BookRead(id=0, **fields)
        with self._cursor(book.isbn) as cursor:
            cursor.execute(
                """
                INSERT INTO books (title, author, published_date, isbn, available)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    book.title,
                    book.author,
                    book.published_date.isoformat(),
                    book.isbn,
                    int(book.available),
                ),
            )
            book_id = cursor.lastrowid
        return book.model_copy(update={"id": book_id})

    def get(self, book_id: int) -> BookRead:
        self._check_id(book_id)
        with self._cursor() as cursor:
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (book_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError(book_id)
        return self._row_to_book(row)

    def list(self) -> List[BookRead]:
        with self._cursor() as cursor:
            rows = cursor.execute(f"{_SELECT} ORDER BY id ASC").fetchall()
        return [self._row_to_book(row) for row in rows]

    def update(self, book_id: int, fields: Dict[str, Any], partial: bool = True) -> BookRead:
        self._check_id(book_id)
        isbn = fields.get("isbn")
        with self._cursor(isbn) as cursor:
            # Take the write lock before reading so the merge below sees
            # the row exactly as it is when written back.
            cursor.execute("BEGIN IMMEDIATE")
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (book_id,)).fetchone()
            if row is None:
                raise RecordNotFoundError(book_id)
            book = BookRead(id=book_id, **merge_fields(self._row_to_book(row), fields, partial))
            cursor.execute(
                """
                UPDATE books
                SET title = ?, author = ?, published_date = ?, isbn = ?, available = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    book.title,
                    book.author,
                    book.published_date.isoformat(),
                    book.isbn,
                    int(book.available),
                    book_id,
                ),
            )
        return book

    def delete(self, book_id: int) -> None:
        self._check_id(book_id)
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM books WHERE id = ?", (book_id,))
            affected = cursor.rowcount
        if not affected:
            raise RecordNotFoundError(book_id)

    @staticmethod
    def _check_id(book_id: int) -> None:
        # sqlite3 raises OverflowError binding ints outside 64 bits; no
        # such row can exist.
        if not -_MAX_ROWID - 1 <= book_id <= _MAX_ROWID:
            raise RecordNotFoundError(book_id)

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> BookRead:
        """Convert a database row to a ``BookRead`` instance."""
        return BookRead(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            published_date=row["published_date"],
            isbn=row["isbn"],
            available=bool(row["available"]),
        )
