import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from library_api.app.core.db import get_connection
from library_api.app.storage import (
    DuplicateKeyError,
    RecordNotFoundError,
    SQLiteBookRepository,
    StorageUnavailableError,
    build_repository,
)


def test_create_assigns_increasing_ids(repository, gatsby, dune):
    first = repository.create(gatsby)
    second = repository.create(dune)
    assert first.id == 1
    assert second.id == 2
    assert first.published_date == date(1925, 4, 10)


def test_create_rejects_duplicate_isbn(repository, gatsby):
    original = repository.create(gatsby)
    with pytest.raises(DuplicateKeyError):
        repository.create(dict(gatsby, title="Another title"))
    assert repository.get(original.id) == original
    assert len(repository.list()) == 1


def test_get_missing_raises(repository):
    with pytest.raises(RecordNotFoundError):
        repository.get(42)


def test_list_in_insertion_order_and_is_snapshot(repository, gatsby, dune):
    repository.create(gatsby)
    snapshot = repository.list()
    repository.create(dune)
    assert [b.isbn for b in snapshot] == [gatsby["isbn"]]
    assert [b.isbn for b in repository.list()] == [gatsby["isbn"], dune["isbn"]]


def test_partial_update_merges_fields(repository, gatsby):
    book = repository.create(gatsby)
    updated = repository.update(book.id, {"available": False}, partial=True)
    assert updated.available is False
    assert updated.title == gatsby["title"]
    assert repository.get(book.id) == updated


def test_full_update_requires_every_field(repository, gatsby):
    book = repository.create(gatsby)
    with pytest.raises(ValueError):
        repository.update(book.id, {"title": "Only a title"}, partial=False)
    assert repository.get(book.id) == book


def test_full_update_replaces_fields(repository, gatsby):
    book = repository.create(gatsby)
    fields = dict(gatsby, title="Gatsby", published_date=date(1926, 1, 1))
    updated = repository.update(book.id, fields, partial=False)
    assert updated.title == "Gatsby"
    assert repository.get(book.id).published_date == date(1926, 1, 1)


def test_update_to_taken_isbn_conflicts(repository, gatsby, dune):
    repository.create(gatsby)
    other = repository.create(dune)
    with pytest.raises(DuplicateKeyError):
        repository.update(other.id, {"isbn": gatsby["isbn"]})
    assert repository.get(other.id).isbn == dune["isbn"]


def test_update_keeping_own_isbn_is_allowed(repository, gatsby):
    book = repository.create(gatsby)
    updated = repository.update(book.id, {"isbn": gatsby["isbn"], "title": "Renamed"})
    assert updated.title == "Renamed"


def test_update_missing_raises(repository):
    with pytest.raises(RecordNotFoundError):
        repository.update(7, {"title": "x"})


def test_delete_removes_record_and_frees_isbn(repository, gatsby):
    book = repository.create(gatsby)
    repository.delete(book.id)
    with pytest.raises(RecordNotFoundError):
        repository.get(book.id)
    with pytest.raises(RecordNotFoundError):
        repository.delete(book.id)
    assert repository.create(gatsby).id != book.id


def test_sqlite_persists_across_instances(tmp_path, gatsby):
    path = str(tmp_path / "library.db")
    SQLiteBookRepository(path).create(gatsby)
    reopened = SQLiteBookRepository(path)
    assert [b.title for b in reopened.list()] == [gatsby["title"]]


def test_sqlite_missing_table_is_unavailable(tmp_path):
    repository = SQLiteBookRepository(str(tmp_path / "bare.db"), migrate=False)
    with pytest.raises(StorageUnavailableError):
        repository.list()


def test_sqlite_migrations_are_recorded_once(tmp_path):
    path = str(tmp_path / "library.db")
    SQLiteBookRepository(path)
    SQLiteBookRepository(path)
    conn = get_connection(path)
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    finally:
        conn.close()
    assert versions == [1]


def test_build_repository(tmp_path):
    assert build_repository("memory").name == "memory"
    assert build_repository("sqlite", str(tmp_path / "b.db")).name == "sqlite"
    with pytest.raises(ValueError):
        build_repository("postgres")


def test_sqlite_unreachable_database_is_unavailable(tmp_path):
    missing_dir = tmp_path / "no" / "such" / "dir" / "books.db"
    with pytest.raises(StorageUnavailableError) as exc_info:
        SQLiteBookRepository(str(missing_dir))
    assert isinstance(exc_info.value.__cause__, sqlite3.Error)


@pytest.mark.parametrize(
    "call",
    [
        lambda repo, book_id: repo.get(book_id),
        lambda repo, book_id: repo.update(book_id, {"title": "x"}),
        lambda repo, book_id: repo.delete(book_id),
    ],
    ids=["get", "update", "delete"],
)
def test_id_beyond_64_bits_is_not_found(repository, gatsby, call):
    repository.create(gatsby)
    with pytest.raises(RecordNotFoundError):
        call(repository, 99999999999999999999)
    assert len(repository.list()) == 1


def test_concurrent_creates_with_same_isbn(repository, gatsby):
    workers = 8
    barrier = threading.Barrier(workers)

    def attempt(n):
        barrier.wait()
        try:
            return repository.create(dict(gatsby, title=f"Copy {n}"))
        except DuplicateKeyError:
            return None

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    assert len([book for book in results if book is not None]) == 1
    assert len(repository.list()) == 1
